"""Semantic versions and the bump a given severity requires."""

import re
from dataclasses import dataclass

from .severity import Severity

_VERSION_RE = re.compile(r"^(0|[1-9]\d*)\.(0|[1-9]\d*)\.(0|[1-9]\d*)$")


@dataclass(frozen=True, order=True)
class Version:
    major: int
    minor: int
    patch: int

    @classmethod
    def parse(cls, text: str) -> "Version":
        """Parse "MAJOR.MINOR.PATCH". Leading zeros and suffixes are rejected."""
        match = _VERSION_RE.match(text.strip()) if isinstance(text, str) else None
        if match is None:
            raise ValueError(f"Invalid version '{text}': expected MAJOR.MINOR.PATCH (e.g. '1.0.0')")
        return cls(*(int(part) for part in match.groups()))

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"


def bump(version: Version, severity: Severity) -> Version:
    """Next version after ``version`` for a change of the given severity."""
    if severity is Severity.MAJOR:
        return Version(version.major + 1, 0, 0)
    if severity is Severity.MINOR:
        return Version(version.major, version.minor + 1, 0)
    return Version(version.major, version.minor, version.patch + 1)


@dataclass(frozen=True)
class BumpCheck:
    """Outcome of checking a proposed version against the required bump."""
    old: Version
    proposed: Version
    expected: Version
    severity: Severity

    @property
    def valid(self) -> bool:
        return self.proposed == self.expected


def check_bump(old: Version, proposed: Version, severity: Severity) -> BumpCheck:
    """The proposed version is valid only if it is exactly the required bump."""
    return BumpCheck(old=old, proposed=proposed, expected=bump(old, severity), severity=severity)
