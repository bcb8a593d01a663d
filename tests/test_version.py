"""Tests for semantic versions and bump rules."""

import pytest

from apibump.kernel.severity import Severity
from apibump.kernel.version import Version, bump, check_bump


def test_parse_and_render():
    v = Version.parse("1.4.2")
    assert v == Version(1, 4, 2)
    assert str(v) == "1.4.2"


@pytest.mark.parametrize("text", ["1.0", "1.0.0-beta", "01.0.0", "v1.0.0", "", "a.b.c"])
def test_parse_rejects_malformed(text):
    with pytest.raises(ValueError, match="Invalid version"):
        Version.parse(text)


def test_ordering():
    assert Version(1, 0, 0) < Version(1, 0, 1) < Version(1, 1, 0) < Version(2, 0, 0)
    assert Version(1, 10, 0) > Version(1, 9, 9)


def test_bump_rules():
    v = Version(1, 4, 2)
    assert bump(v, Severity.PATCH) == Version(1, 4, 3)
    assert bump(v, Severity.MINOR) == Version(1, 5, 0)
    assert bump(v, Severity.MAJOR) == Version(2, 0, 0)


def test_check_bump_accepts_exact_bump():
    check = check_bump(Version(1, 0, 0), Version(1, 1, 0), Severity.MINOR)
    assert check.valid
    assert check.expected == Version(1, 1, 0)


def test_check_bump_rejects_under_and_over_bumps():
    assert not check_bump(Version(1, 0, 0), Version(1, 0, 1), Severity.MAJOR).valid
    assert not check_bump(Version(1, 0, 0), Version(2, 0, 0), Severity.PATCH).valid


def test_check_bump_rejects_non_increasing():
    assert not check_bump(Version(1, 2, 3), Version(1, 2, 3), Severity.PATCH).valid
    assert not check_bump(Version(1, 2, 3), Version(1, 0, 0), Severity.PATCH).valid


def test_check_bump_records_expected_version():
    check = check_bump(Version(2, 3, 4), Version(2, 4, 0), Severity.MAJOR)
    assert check.expected == Version(3, 0, 0)
    assert check.severity is Severity.MAJOR
    assert not check.valid
