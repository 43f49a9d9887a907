"""Tests for tag selection and merging."""

from typing import List, Sequence

import pytest
from rich.console import Console

from parakeet.naming import Record
from parakeet.tags import (
    ADD_CUSTOM_TAG,
    InvalidTagCharacterError,
    RichTagPrompter,
    TagDefinition,
    TagEditor,
    TagPromptError,
    TagRegistry,
    key_from_display,
    validate_tag,
)


class ScriptedPrompter:
    """Prompter returning canned answers and recording what it was shown."""

    def __init__(self, selections: List[List[str]], texts: Sequence[str] = ()) -> None:
        self.selections = list(selections)
        self.texts = list(texts)
        self.shown: list[tuple[list[str], list[str]]] = []
        self.warnings: list[str] = []

    def select_multiple(
        self, message: str, options: Sequence[str], defaults: Sequence[str]
    ) -> list[str]:
        self.shown.append((list(options), list(defaults)))
        return self.selections.pop(0)

    def input_text(self, message: str) -> str:
        return self.texts.pop(0)

    def warn(self, message: str) -> None:
        self.warnings.append(message)


def _registry() -> TagRegistry:
    return TagRegistry(
        [
            TagDefinition(key="network", desc="Networking notes"),
            TagDefinition(key="work"),
        ]
    )


def _record(*tags: str) -> Record:
    return Record(identifier="20250101T000000", comment="notes", tags=list(tags), extension="md")


@pytest.mark.parametrize("tag", ["a/b", "a_b", "a-b", "a.b", "", "   ", ADD_CUSTOM_TAG])
def test_validate_tag_rejects_reserved_characters(tag: str) -> None:
    with pytest.raises(InvalidTagCharacterError):
        validate_tag(tag)


def test_validate_tag_trims() -> None:
    assert validate_tag("  urgent ") == "urgent"


def test_key_from_display_splits_on_first_separator() -> None:
    assert key_from_display("network - Networking - notes") == "network"
    assert key_from_display("plain") == "plain"


def test_set_tags_sorts_and_deduplicates() -> None:
    updated, changed = TagEditor().set_tags(_record("a"), ["c", "b", "c"])

    assert changed is True
    assert updated.tags == ["b", "c"]


def test_set_tags_unchanged_for_same_set() -> None:
    record = _record("b", "a")

    updated, changed = TagEditor().set_tags(record, ["a", "b", "a"])

    assert changed is False
    assert updated is record


def test_set_tags_is_idempotent() -> None:
    editor = TagEditor()
    first, _ = editor.set_tags(_record("x"), ["b", "a"])

    second, changed = editor.set_tags(first, ["b", "a"])

    assert changed is False
    assert second.tags == first.tags


def test_build_options_orders_current_then_registry_then_custom() -> None:
    editor = TagEditor(_registry())

    options = editor.build_options(["work", "local"])

    assert options == ["work", "local", "network - Networking notes", ADD_CUSTOM_TAG]


def test_edit_tags_returns_selection() -> None:
    prompter = ScriptedPrompter([["work", "network - Networking notes"]])
    editor = TagEditor(_registry(), prompter)

    updated, changed = editor.edit_tags(_record("work"))

    assert changed is True
    assert updated.tags == ["network", "work"]
    options, defaults = prompter.shown[0]
    assert defaults == ["work"]
    assert options[-1] == ADD_CUSTOM_TAG


def test_edit_tags_custom_tag_loops_back_to_selection() -> None:
    prompter = ScriptedPrompter(
        [
            ["work", ADD_CUSTOM_TAG],
            ["urgent", "work", "network - Networking notes"],
        ],
        texts=["urgent"],
    )
    editor = TagEditor(_registry(), prompter)

    updated, changed = editor.edit_tags(_record("work"))

    assert changed is True
    assert updated.tags == ["network", "urgent", "work"]
    second_options, second_defaults = prompter.shown[1]
    assert second_options[0] == "urgent"
    assert second_defaults == ["work", "urgent"]


def test_edit_tags_reprompts_on_invalid_custom_tag() -> None:
    prompter = ScriptedPrompter(
        [[ADD_CUSTOM_TAG], ["fixed"]],
        texts=["bad_tag", "fixed"],
    )
    editor = TagEditor(prompter=prompter)

    updated, _ = editor.edit_tags(_record())

    assert updated.tags == ["fixed"]
    assert len(prompter.warnings) == 1
    assert "special characters" in prompter.warnings[0]


def test_edit_tags_rejects_custom_tag_choice_as_tag() -> None:
    prompter = ScriptedPrompter(
        [[ADD_CUSTOM_TAG], ["ok"]],
        texts=[ADD_CUSTOM_TAG, "ok"],
    )

    updated, _ = TagEditor(prompter=prompter).edit_tags(_record())

    assert updated.tags == ["ok"]
    assert len(prompter.warnings) == 1
    assert "reserved" in prompter.warnings[0]


def test_edit_tags_without_change() -> None:
    prompter = ScriptedPrompter([["work"]])
    record = _record("work")

    updated, changed = TagEditor(_registry(), prompter).edit_tags(record)

    assert changed is False
    assert updated is record


def test_edit_tags_requires_prompter() -> None:
    with pytest.raises(RuntimeError):
        TagEditor().edit_tags(_record())


def test_rich_prompter_toggles_numbers(monkeypatch: pytest.MonkeyPatch) -> None:
    answers = iter(["9", "2, 1"])
    monkeypatch.setattr("rich.prompt.Prompt.ask", lambda *args, **kwargs: next(answers))
    prompter = RichTagPrompter(Console(record=True, width=80))

    selected = prompter.select_multiple("Pick", ["a", "b", "c"], ["a"])

    assert selected == ["b"]
    assert "out of range" in prompter.console.export_text()


def test_rich_prompter_adding_one_option_keeps_marked(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("rich.prompt.Prompt.ask", lambda *args, **kwargs: "3")
    prompter = RichTagPrompter(Console(record=True, width=80))

    assert prompter.select_multiple("Pick", ["a", "b", "c"], ["a", "b"]) == ["a", "b", "c"]


def test_rich_prompter_blank_keeps_marked(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("rich.prompt.Prompt.ask", lambda *args, **kwargs: "")
    prompter = RichTagPrompter(Console(record=True, width=80))

    assert prompter.select_multiple("Pick", ["a", "b", "c"], ["c", "a"]) == ["a", "c"]


def test_edit_tags_with_rich_prompter_adds_registry_tag(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("rich.prompt.Prompt.ask", lambda *args, **kwargs: "2")
    prompter = RichTagPrompter(Console(record=True, width=80))
    registry = TagRegistry([TagDefinition(key="network")])

    updated, changed = TagEditor(registry, prompter).edit_tags(_record("work"))

    assert changed is True
    assert updated.tags == ["network", "work"]


def test_rich_prompter_none_clears_selection(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("rich.prompt.Prompt.ask", lambda *args, **kwargs: "none")
    prompter = RichTagPrompter(Console(record=True, width=80))

    assert prompter.select_multiple("Pick", ["a", "b"], ["a"]) == []


def test_rich_prompter_abort_raises(monkeypatch: pytest.MonkeyPatch) -> None:
    def _abort(*args: object, **kwargs: object) -> str:
        raise EOFError

    monkeypatch.setattr("rich.prompt.Prompt.ask", _abort)
    prompter = RichTagPrompter(Console(record=True, width=80))

    with pytest.raises(TagPromptError):
        prompter.input_text("Tag")
