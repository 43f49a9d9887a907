"""Tests for rename planning and execution."""

from datetime import datetime
from pathlib import Path

import pytest

from parakeet.naming import (
    DirectoryEntry,
    DirectoryLister,
    IdentifierClock,
    RenameCollisionError,
    TargetMissingError,
    is_well_formed,
)
from parakeet.organization import (
    IdentifierPlanner,
    OperationExecutor,
    OperationPlan,
    RenameOperation,
    rename_path,
)


def _planner() -> IdentifierPlanner:
    return IdentifierPlanner(IdentifierClock(now=lambda: datetime(2025, 1, 1, 0, 0, 0)))


def _entries(*names: str) -> list[DirectoryEntry]:
    return [DirectoryEntry(name=name) for name in names]


def test_plan_assigns_unique_identifiers_in_order(tmp_path: Path) -> None:
    entries = _entries("a.txt", "b.md", "20250101T000000--done.txt")

    plan = _planner().build_plan(tmp_path, entries)

    assert [op.destination.name for op in plan.renames] == [
        "20250101T000001--a.txt",
        "20250101T000002--b.md",
    ]
    assert [op.identifier for op in plan.renames] == ["20250101T000001", "20250101T000002"]
    assert [(entry.name, entry.reason) for entry in plan.skipped] == [
        ("20250101T000000--done.txt", "already formatted")
    ]


def test_plan_skips_directories_and_filtered_extensions(tmp_path: Path) -> None:
    entries = [
        DirectoryEntry(name="folder", is_dir=True),
        *_entries("keep.PDF", "drop.txt"),
    ]

    plan = _planner().build_plan(tmp_path, entries, extensions=["pdf"])

    assert [op.source.name for op in plan.renames] == ["keep.PDF"]
    assert plan.renames[0].destination.name == "20250101T000000--keep.PDF"
    assert plan.skipped == []


def test_plan_keeps_files_without_extension(tmp_path: Path) -> None:
    plan = _planner().build_plan(tmp_path, _entries("README"))

    assert plan.renames[0].destination.name == "20250101T000000--README"


def test_plan_results_are_well_formed(tmp_path: Path) -> None:
    plan = _planner().build_plan(tmp_path, _entries("one.txt", "two words.txt", "archive.tar.gz"))

    assert all(is_well_formed(op.destination.name) for op in plan.renames)
    identifiers = [op.identifier for op in plan.renames]
    assert len(set(identifiers)) == len(identifiers)


def test_executor_renames_files(tmp_path: Path) -> None:
    (tmp_path / "a.txt").write_text("a", encoding="utf-8")
    (tmp_path / "b.txt").write_text("b", encoding="utf-8")
    entries = DirectoryLister().snapshot(tmp_path)
    plan = _planner().build_plan(tmp_path, entries)

    result = OperationExecutor().apply(plan)

    assert len(result.applied) == 2
    assert result.failed == []
    assert sorted(path.name for path in tmp_path.iterdir()) == [
        "20250101T000000--a.txt",
        "20250101T000001--b.txt",
    ]


def test_executor_dry_run_leaves_files(tmp_path: Path) -> None:
    (tmp_path / "a.txt").write_text("a", encoding="utf-8")
    plan = _planner().build_plan(tmp_path, DirectoryLister().snapshot(tmp_path))

    result = OperationExecutor().apply(plan, dry_run=True)

    assert result.dry_run is True
    assert len(result.applied) == 1
    assert (tmp_path / "a.txt").exists()


def test_executor_continues_after_failure(tmp_path: Path) -> None:
    (tmp_path / "present.txt").write_text("x", encoding="utf-8")
    plan = OperationPlan(
        renames=[
            RenameOperation(
                source=tmp_path / "missing.txt",
                destination=tmp_path / "20250101T000000--missing.txt",
            ),
            RenameOperation(
                source=tmp_path / "present.txt",
                destination=tmp_path / "20250101T000001--present.txt",
            ),
        ]
    )

    result = OperationExecutor().apply(plan)

    assert [failure.operation.source.name for failure in result.failed] == ["missing.txt"]
    assert [op.source.name for op in result.applied] == ["present.txt"]
    assert (tmp_path / "20250101T000001--present.txt").exists()


def test_rename_path_never_overwrites(tmp_path: Path) -> None:
    source = tmp_path / "a.txt"
    destination = tmp_path / "b.txt"
    source.write_text("a", encoding="utf-8")
    destination.write_text("b", encoding="utf-8")

    with pytest.raises(RenameCollisionError):
        rename_path(source, destination)
    assert destination.read_text(encoding="utf-8") == "b"


def test_rename_path_missing_source(tmp_path: Path) -> None:
    with pytest.raises(TargetMissingError):
        rename_path(tmp_path / "gone.txt", tmp_path / "new.txt")
