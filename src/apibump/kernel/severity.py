"""Semantic-versioning severity of API changes.

PATCH < MINOR < MAJOR. Severities combine with max: one breaking change
anywhere makes the whole package change MAJOR.

Rules:
- anything removed or changed (any entity kind, or a whole module) is MAJOR
- otherwise anything added is MINOR
- otherwise PATCH
"""

from enum import IntEnum
from functools import reduce
from typing import Iterable, Union

from apibump.logging import get_logger

from .diff import Changes, ModuleChanges, PackageChanges

log = get_logger(__name__)


class Severity(IntEnum):
    """Minimal version bump a set of API changes requires."""

    PATCH = 0
    MINOR = 1
    MAJOR = 2

    @property
    def label(self) -> str:
        return self.name

    @classmethod
    def parse(cls, label: str) -> "Severity":
        """Parse a label such as "minor" or "MAJOR"."""
        try:
            return cls[label.strip().upper()]
        except KeyError:
            raise ValueError(
                f"Unknown severity '{label}'. Expected one of: {', '.join(s.name for s in cls)}"
            ) from None

    def __str__(self) -> str:
        return self.name


def combine(a: Severity, b: Severity) -> Severity:
    return max(a, b)


def combine_all(severities: Iterable[Severity]) -> Severity:
    return reduce(combine, severities, Severity.PATCH)


def changes_severity(changes: Changes) -> Severity:
    """Severity of one entity kind's changes."""
    if changes.removed or changes.changed:
        return Severity.MAJOR
    if changes.added:
        return Severity.MINOR
    return Severity.PATCH


def module_severity(changes: ModuleChanges) -> Severity:
    return combine_all(changes_severity(c) for c in changes.by_kind().values())


def package_severity(changes: PackageChanges) -> Severity:
    """Fold module additions/removals and every changed module into one verdict."""
    structural = Severity.PATCH
    if changes.modules_removed:
        structural = Severity.MAJOR
    elif changes.modules_added:
        structural = Severity.MINOR
    verdict = combine(
        structural,
        combine_all(module_severity(mc) for mc in changes.modules_changed.values()),
    )
    log.debug(
        "package_verdict",
        severity=verdict.label,
        modules_added=len(changes.modules_added),
        modules_removed=len(changes.modules_removed),
        modules_changed=len(changes.modules_changed),
    )
    return verdict


def severity_of(changes: Union[PackageChanges, ModuleChanges, Changes]) -> Severity:
    """Severity of a package, module or single-kind diff result."""
    if isinstance(changes, PackageChanges):
        return package_severity(changes)
    if isinstance(changes, ModuleChanges):
        return module_severity(changes)
    if isinstance(changes, Changes):
        return changes_severity(changes)
    raise TypeError(f"Cannot compute severity of {type(changes).__name__}")
