"""apibump: API diff and semantic-version bump classification."""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("apibump")
except PackageNotFoundError:
    __version__ = "dev"

# Public API exports
# Note: diff is exported from apibump.api, not from root
# This avoids a name clash with the apibump.kernel.diff module
from apibump.api import validate, suggest_version, DiffResult, ValidationResult
from apibump.codes import ChangeCode, ValidationCode
from apibump.kernel.diff import PackageChanges, ModuleChanges, Changes, diff_package
from apibump.kernel.severity import Severity, severity_of
from apibump.kernel.snapshot import PackageSnapshot, ModuleSnapshot

__all__ = [
    "__version__",
    "validate",
    "suggest_version",
    "DiffResult",
    "ValidationResult",
    "ChangeCode",
    "ValidationCode",
    "PackageChanges",
    "ModuleChanges",
    "Changes",
    "diff_package",
    "Severity",
    "severity_of",
    "PackageSnapshot",
    "ModuleSnapshot",
]
