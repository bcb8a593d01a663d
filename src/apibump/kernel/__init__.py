"""Pure API diff kernel: snapshots in, changes and severity out. No I/O."""

from apibump.kernel.diff import (
    Changed,
    Changes,
    ModuleChanges,
    PackageChanges,
    diff_module,
    diff_named,
    diff_package,
)
from apibump.kernel.equivalence import types_equivalent
from apibump.kernel.severity import Severity, combine, severity_of
from apibump.kernel.snapshot import (
    AliasDecl,
    BinopDecl,
    ModuleSnapshot,
    PackageSnapshot,
    Tag,
    UnionDecl,
    ValueDecl,
)

__all__ = [
    "AliasDecl",
    "BinopDecl",
    "Changed",
    "Changes",
    "ModuleChanges",
    "ModuleSnapshot",
    "PackageChanges",
    "PackageSnapshot",
    "Severity",
    "Tag",
    "UnionDecl",
    "ValueDecl",
    "combine",
    "diff_module",
    "diff_named",
    "diff_package",
    "severity_of",
    "types_equivalent",
]
