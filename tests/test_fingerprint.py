"""Tests for snapshot fingerprints and canonical JSON."""

from apibump._internal.canonical_json import canonical_dumps
from apibump.kernel.diff import diff_package
from apibump.kernel.fingerprint import fingerprint
from apibump.kernel.snapshot import ModuleSnapshot, PackageSnapshot, ValueDecl
from apibump.kernel.types import named, record


def test_canonical_dumps_sorts_keys_compactly():
    assert canonical_dumps({"b": 1, "a": [2, 1]}) == '{"a":[2,1],"b":1}'


def test_canonical_dumps_indent():
    assert canonical_dumps({"b": 1, "a": 2}, indent=2) == '{\n  "a": 2,\n  "b": 1\n}'


def test_canonical_dumps_keeps_utf8():
    assert canonical_dumps({"name": "café"}) == '{"name":"café"}'


def test_fingerprint_format_and_stability():
    pkg = PackageSnapshot(modules=[ModuleSnapshot(name="A", values=[ValueDecl(name="x", type=named("Basics.Int"))])])
    fp = fingerprint(pkg)
    assert fp.startswith("sha256:")
    assert len(fp) == len("sha256:") + 64
    assert fingerprint(pkg.model_copy(deep=True)) == fp


def test_fingerprint_changes_with_content():
    a = PackageSnapshot(modules=[ModuleSnapshot(name="A")])
    b = PackageSnapshot(modules=[ModuleSnapshot(name="B")])
    assert fingerprint(a) != fingerprint(b)


def test_fingerprint_distinguishes_unicode_spellings_like_diff():
    """NFC and NFD names are different names to the differ, so they hash differently."""
    composed = PackageSnapshot(modules=[ModuleSnapshot(name="Caf\u00e9")])
    decomposed = PackageSnapshot(modules=[ModuleSnapshot(name="Cafe\u0301")])
    assert not diff_package(composed, decomposed).is_empty
    assert fingerprint(composed) != fingerprint(decomposed)


def test_fingerprint_distinguishes_record_field_spellings():
    def package(field_name):
        value = ValueDecl(name="config", type=record(**{field_name: named("Basics.Int")}))
        return PackageSnapshot(modules=[ModuleSnapshot(name="A", values=[value])])

    composed = package("caf\u00e9")
    decomposed = package("cafe\u0301")
    assert not diff_package(composed, decomposed).is_empty
    assert fingerprint(composed) != fingerprint(decomposed)


def test_equal_fingerprints_mean_empty_diff():
    old = PackageSnapshot(modules=[ModuleSnapshot(name="A", values=[ValueDecl(name="x", type=named("Basics.Int"))])])
    new = PackageSnapshot.model_validate(old.model_dump(mode="json"))
    assert fingerprint(old) == fingerprint(new)
    assert diff_package(old, new).is_empty
