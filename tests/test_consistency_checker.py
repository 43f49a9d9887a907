"""Tests for directory consistency checks."""

from pathlib import Path

from parakeet.naming import DirectoryEntry, DirectoryLister
from parakeet.tags import TagDefinition, TagRegistry
from parakeet.validation import ConsistencyChecker, validate_directory


def _entries(*names: str) -> list[DirectoryEntry]:
    return [DirectoryEntry(name=name) for name in names]


def test_duplicates_and_malformed_are_reported() -> None:
    entries = _entries(
        "20250101T000000--a.txt",
        "20250101T000000--b.txt",
        "bad.txt",
    )

    report = ConsistencyChecker().check(entries)

    assert report.total == 3
    assert report.valid == 2
    assert report.malformed == ["bad.txt"]
    assert report.duplicates == {
        "20250101T000000": ["20250101T000000--a.txt", "20250101T000000--b.txt"]
    }
    assert report.duplicate_entries == ["20250101T000000--a.txt", "20250101T000000--b.txt"]
    assert not report.is_clean


def test_clean_directory() -> None:
    report = ConsistencyChecker().check(
        _entries("20250101T000000--a.txt", "20250101T000001--b__x.txt")
    )

    assert report.is_clean
    assert report.counts() == {
        "total": 2,
        "valid": 2,
        "malformed": 0,
        "duplicates": 0,
        "undefined_tags": 0,
    }


def test_directories_are_ignored() -> None:
    entries = [DirectoryEntry(name="folder", is_dir=True), *_entries("bad.txt")]

    report = ConsistencyChecker().check(entries)

    assert report.total == 1


def test_undefined_tags_checked_only_with_registry() -> None:
    entries = _entries("20250101T000000--x__anything.txt")

    without_registry = ConsistencyChecker().check(entries)
    with_registry = ConsistencyChecker(TagRegistry([TagDefinition(key="network")])).check(
        entries
    )

    assert without_registry.undefined_tags == {}
    assert without_registry.registry_loaded is False
    assert with_registry.undefined_tags == {"20250101T000000--x__anything.txt": ["anything"]}
    assert with_registry.registry_loaded is True


def test_extension_filter_is_case_insensitive() -> None:
    entries = _entries("report.PDF", "notes.txt", "20250101T000000--scan.pdf")

    report = ConsistencyChecker().check(entries, extensions=["pdf"])

    assert report.total == 2
    assert report.malformed == ["report.PDF"]
    assert report.valid == 1


def test_counts_are_consistent() -> None:
    entries = _entries(
        "20250101T000000--a.txt",
        "20250101T000000--b.txt",
        "20250101T000000--c.txt",
        "20250102T000000--d.txt",
        "junk",
        "other junk.md",
    )

    report = ConsistencyChecker().check(entries)

    assert report.valid + len(report.malformed) == report.total
    assert len(report.duplicate_entries) == 3
    assert all(len(names) >= 2 for names in report.duplicates.values())


def test_validate_directory_reads_registry(tmp_path: Path) -> None:
    (tmp_path / "tags.yaml").write_text("tag:\n  - key: network\n", encoding="utf-8")
    (tmp_path / "20250101T000000--a__network_extra.txt").write_text("", encoding="utf-8")

    report = validate_directory(
        tmp_path,
        lister=DirectoryLister(ignore_names=["tags.yaml"]),
        registry_path=tmp_path / "tags.yaml",
    )

    assert report.total == 1
    assert report.undefined_tags == {"20250101T000000--a__network_extra.txt": ["extra"]}


def test_validate_directory_ignores_broken_registry(tmp_path: Path) -> None:
    (tmp_path / "tags.yaml").write_text("tag: [broken\n", encoding="utf-8")
    (tmp_path / "20250101T000000--a__anything.txt").write_text("", encoding="utf-8")

    report = validate_directory(
        tmp_path,
        lister=DirectoryLister(ignore_names=["tags.yaml"]),
        registry_path=tmp_path / "tags.yaml",
    )

    assert report.registry_loaded is False
    assert report.is_clean
