"""Public API for the apibump package.

High-level functions that return complete, structured results. Callers
(presentation code, CI scripts) should use these instead of reaching into
``apibump.kernel`` for anything beyond the data model.
"""

import json
import os
from pathlib import Path
from typing import Dict, List, Literal, Optional, Union

from pydantic import BaseModel, Field, ValidationError

from apibump.codes import ChangeCode, ValidationCode
from apibump.errors import SnapshotLoadError
from apibump.kernel.diff import PackageChanges, diff_package
from apibump.kernel.fingerprint import fingerprint
from apibump.kernel.severity import module_severity, package_severity
from apibump.kernel.snapshot import PackageSnapshot
from apibump.kernel.version import Version, bump, check_bump
from apibump.logging import get_logger

log = get_logger("apibump.api")

SnapshotInput = Union[PackageSnapshot, Dict, str, os.PathLike]


def _normalize_path(path: Union[str, os.PathLike, Path]) -> Path:
    """Normalize path input to Path object."""
    return Path(path) if not isinstance(path, Path) else path


def _read_json(path: Path) -> Dict:
    try:
        with open(path, 'r', encoding='utf-8') as f:
            return json.load(f)
    except FileNotFoundError as e:
        raise SnapshotLoadError("snapshot file not found", source=str(path)) from e
    except json.JSONDecodeError as e:
        raise SnapshotLoadError(f"invalid JSON: {e}", source=str(path)) from e
    except UnicodeDecodeError as e:
        raise SnapshotLoadError(f"not valid UTF-8: {e}", source=str(path)) from e
    except OSError as e:
        raise SnapshotLoadError(f"cannot read snapshot: {e}", source=str(path)) from e


def _load_snapshot_from_dict(data: Dict, source: Optional[str] = None) -> PackageSnapshot:
    """Load a package snapshot from its serialized dict form."""
    try:
        return PackageSnapshot.model_validate(data)
    except ValidationError as e:
        raise SnapshotLoadError(f"invalid snapshot: {e}", source=source) from e


def _load_snapshot_from_path(path: Path) -> PackageSnapshot:
    """Load a package snapshot from JSON file."""
    return _load_snapshot_from_dict(_read_json(path), source=str(path))


def load_snapshot(snapshot: SnapshotInput) -> PackageSnapshot:
    """Accept a snapshot model, its dict form, or a path to its JSON file.

    Raises:
        SnapshotLoadError: If the file is missing or unreadable, or the data is invalid.
    """
    if isinstance(snapshot, PackageSnapshot):
        return snapshot
    if isinstance(snapshot, dict):
        return _load_snapshot_from_dict(snapshot)
    path = _normalize_path(snapshot)
    result = _load_snapshot_from_path(path)
    log.info("snapshot_loaded", path=str(path), modules=len(result.modules))
    return result


class DiffResult(BaseModel):
    """Stable result model for an API diff."""
    package: Optional[str] = None
    from_version: Optional[str] = None
    to_version: Optional[str] = None
    severity: Literal["PATCH", "MINOR", "MAJOR"]
    modules_added: List[str]  # Later snapshot order
    modules_removed: List[str]  # Earlier snapshot order
    module_severities: Dict[str, str] = Field(default_factory=dict)  # Changed modules only
    change_summary: Dict[str, int] = Field(default_factory=dict)  # ChangeCode value -> count
    changes: Dict = Field(default_factory=dict)  # PackageChanges.to_dict()
    from_fingerprint: str
    to_fingerprint: str
    expected_version: Optional[str] = None  # Only when from_version is known
    version_valid: Optional[bool] = None  # Only when both versions are known


class ValidationIssue(BaseModel):
    """A single validation issue."""
    code: str  # ValidationCode value
    message: str
    location: Optional[str] = None  # Dotted path into the snapshot, e.g. "modules.0.values"


class ValidationResult(BaseModel):
    """Result of validating a snapshot."""
    ok: bool
    errors: List[ValidationIssue]


def _change_summary(changes: PackageChanges) -> Dict[str, int]:
    """Count changes by code. Codes with zero occurrences are omitted."""
    summary: Dict[str, int] = {}

    def add(code: ChangeCode, count: int) -> None:
        if count:
            summary[code.value] = summary.get(code.value, 0) + count

    add(ChangeCode.MODULE_ADDED, len(changes.modules_added))
    add(ChangeCode.MODULE_REMOVED, len(changes.modules_removed))
    for module_changes in changes.modules_changed.values():
        for kind, kind_changes in module_changes.by_kind().items():
            add(ChangeCode.for_entity(kind, "added"), len(kind_changes.added))
            add(ChangeCode.for_entity(kind, "removed"), len(kind_changes.removed))
            add(ChangeCode.for_entity(kind, "changed"), len(kind_changes.changed))
    return summary


def diff(from_snapshot: SnapshotInput, to_snapshot: SnapshotInput) -> DiffResult:
    """
    Diff two package snapshots and classify the required version bump.

    Args:
        from_snapshot: Earlier snapshot (model, dict, or path to JSON)
        to_snapshot: Later snapshot (model, dict, or path to JSON)

    Returns:
        DiffResult

    Raises:
        SnapshotLoadError: If either snapshot cannot be loaded
        ValueError: If a snapshot carries a malformed version string
    """
    earlier = load_snapshot(from_snapshot)
    later = load_snapshot(to_snapshot)

    from_fingerprint = fingerprint(earlier)
    to_fingerprint = fingerprint(later)
    if from_fingerprint == to_fingerprint:
        log.debug("snapshots_identical", fingerprint=from_fingerprint)

    changes = diff_package(earlier, later)
    severity = package_severity(changes)

    expected_version: Optional[str] = None
    version_valid: Optional[bool] = None
    if earlier.version is not None:
        old_version = Version.parse(earlier.version)
        expected_version = str(bump(old_version, severity))
        if later.version is not None:
            version_valid = check_bump(old_version, Version.parse(later.version), severity).valid

    log.info(
        "diff_complete",
        package=later.name or earlier.name,
        severity=severity.label,
        modules_changed=len(changes.modules_changed),
    )

    return DiffResult(
        package=later.name or earlier.name,
        from_version=earlier.version,
        to_version=later.version,
        severity=severity.label,
        modules_added=list(changes.modules_added),
        modules_removed=list(changes.modules_removed),
        module_severities={
            name: module_severity(mc).label for name, mc in changes.modules_changed.items()
        },
        change_summary=_change_summary(changes),
        changes=changes.to_dict(),
        from_fingerprint=from_fingerprint,
        to_fingerprint=to_fingerprint,
        expected_version=expected_version,
        version_valid=version_valid,
    )


def suggest_version(from_snapshot: SnapshotInput, to_snapshot: SnapshotInput) -> str:
    """Return the version the later snapshot should be published as.

    Raises:
        ValueError: If the earlier snapshot has no version, or a malformed one
    """
    earlier = load_snapshot(from_snapshot)
    if earlier.version is None:
        raise ValueError("Earlier snapshot has no version; cannot suggest the next one")
    severity = package_severity(diff_package(earlier, load_snapshot(to_snapshot)))
    return str(bump(Version.parse(earlier.version), severity))


def _issue_from_error(error: Dict) -> ValidationIssue:
    message = error.get("msg", "")
    code = ValidationCode.DUPLICATE_NAME if "Duplicate" in message else ValidationCode.INVALID_STRUCTURE
    location = ".".join(str(part) for part in error.get("loc", ())) or None
    return ValidationIssue(code=code.value, message=message, location=location)


def validate(snapshot: Union[Dict, str, os.PathLike]) -> ValidationResult:
    """
    Validate a serialized snapshot without raising.

    Args:
        snapshot: Snapshot dict, or path to its JSON file

    Returns:
        ValidationResult with every issue found (sorted by location, then code)
    """
    source: Optional[str] = None
    if isinstance(snapshot, dict):
        data = snapshot
    else:
        path = _normalize_path(snapshot)
        source = str(path)
        if not path.exists():
            return ValidationResult(ok=False, errors=[ValidationIssue(
                code=ValidationCode.FILE_NOT_FOUND.value,
                message=f"Snapshot file not found: {path}",
            )])
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            return ValidationResult(ok=False, errors=[ValidationIssue(
                code=ValidationCode.INVALID_JSON.value,
                message=f"Invalid JSON: {e}",
            )])
        except OSError as e:
            # Directories, permission errors, files removed after the exists() check
            return ValidationResult(ok=False, errors=[ValidationIssue(
                code=ValidationCode.FILE_UNREADABLE.value,
                message=f"Cannot read snapshot {path}: {e}",
            )])

    errors: List[ValidationIssue] = []
    try:
        model = PackageSnapshot.model_validate(data)
    except ValidationError as e:
        errors.extend(_issue_from_error(err) for err in e.errors())
        model = None

    if model is not None and model.version is not None:
        try:
            Version.parse(model.version)
        except ValueError as e:
            errors.append(ValidationIssue(
                code=ValidationCode.INVALID_VERSION.value,
                message=str(e),
                location="version",
            ))

    errors.sort(key=lambda issue: (issue.location or "", issue.code))
    log.info("snapshot_validated", source=source, ok=not errors, errors=len(errors))
    return ValidationResult(ok=not errors, errors=errors)
