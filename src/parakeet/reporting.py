"""Plain-text and Markdown rendering of decoded records and reports."""

from __future__ import annotations

from typing import Any, Iterable

from parakeet.naming import Record
from parakeet.validation import ValidationReport

MARKDOWN_HEADER = "| ID | Title | Tags |"
MARKDOWN_SEPARATOR = "|---|---|---|"
ALL_CLEAR = "All files are properly formatted!"


def markdown_table(records: Iterable[Record]) -> str:
    """Render records as a Markdown table with identifier, comment, and tags columns."""
    lines = [MARKDOWN_HEADER, MARKDOWN_SEPARATOR]
    for record in records:
        lines.append(f"| {record.identifier} | {record.comment} | {', '.join(record.tags)} |")
    return "\n".join(lines)


def describe_record(name: str, record: Record) -> list[str]:
    """Return the lines printed by `parakeet tag --show`."""
    tags = ", ".join(record.tags) if record.tags else "(none)"
    return [
        f"File: {name}",
        f"Timestamp: {record.identifier}",
        f"Comment: {record.comment}",
        f"Tags: {tags}",
    ]


def report_problems(report: ValidationReport) -> list[tuple[str, str]]:
    """Return itemized ``(mode, message)`` pairs for every problem in ``report``.

    Modes are ``error`` for malformed names and ``warning`` for duplicates and
    undefined tags.
    """

    lines: list[tuple[str, str]] = []
    for name in report.malformed:
        lines.append(("error", f"✗ {name} (invalid format)"))
    for identifier, names in report.duplicates.items():
        for name in names:
            lines.append(("warning", f"⚠ {name} (duplicate timestamp: {identifier})"))
    for name, tags in report.undefined_tags.items():
        lines.append(("warning", f"⚠ {name} (undefined tags: {', '.join(tags)})"))
    return lines


def report_verdicts(report: ValidationReport) -> list[tuple[str, str]]:
    """Return the closing verdict lines: the all-clear, or one line per problem category."""
    if report.is_clean:
        return [("summary", f"✓ {ALL_CLEAR}")]
    verdicts: list[tuple[str, str]] = []
    if report.has_malformed:
        verdicts.append(("error", "✗ Some files have invalid format."))
    if report.has_duplicates:
        verdicts.append(("warning", "⚠ Some files have duplicate timestamps."))
    if report.has_undefined_tags:
        verdicts.append(("warning", "⚠ Some files have undefined tags."))
    return verdicts


def report_payload(report: ValidationReport, root: str) -> dict[str, Any]:
    """Return the JSON payload for `parakeet validate --json`."""
    payload = report.model_dump(mode="json")
    payload["context"] = {"root": root}
    payload["counts"] = report.counts()
    payload["clean"] = report.is_clean
    return payload


__all__ = [
    "ALL_CLEAR",
    "describe_record",
    "markdown_table",
    "report_payload",
    "report_problems",
    "report_verdicts",
]
