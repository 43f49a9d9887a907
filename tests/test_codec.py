"""Tests for the file-name codec."""

import pytest

from parakeet.naming import (
    MalformedNameError,
    Record,
    decode,
    encode,
    is_well_formed,
    matches_extensions,
    normalize_extensions,
    split_extension,
)


def test_encode_full_record() -> None:
    record = Record(
        identifier="20250903T083109",
        comment="meeting notes",
        tags=["network", "work"],
        extension="md",
    )

    assert encode(record) == "20250903T083109--meeting notes__network_work.md"


def test_encode_omits_empty_tags_and_extension() -> None:
    record = Record(identifier="20250903T083109", comment="readme")

    assert encode(record) == "20250903T083109--readme"


def test_decode_full_name() -> None:
    record = decode("20250903T083109--meeting notes__network_work.md")

    assert record.identifier == "20250903T083109"
    assert record.comment == "meeting notes"
    assert record.tags == ["network", "work"]
    assert record.extension == "md"


def test_decode_without_tags_has_empty_tag_list() -> None:
    record = decode("20250101T000000--a.txt")

    assert record.tags == []
    assert record.comment == "a"


def test_decode_flattens_multiple_tag_groups() -> None:
    record = decode("20250101T000000--multi__tag1_tag2__tag3_tag4.md")

    assert record.comment == "multi"
    assert record.tags == ["tag1", "tag2", "tag3", "tag4"]
    assert record.extension == "md"


def test_decode_splits_comment_on_first_primary_delimiter() -> None:
    record = decode("20250101T000000--a--b.txt")

    assert record.identifier == "20250101T000000"
    assert record.comment == "a--b"


def test_decode_uses_last_dot_for_extension() -> None:
    record = decode("20250101T000000--archive.tar.gz")

    assert record.comment == "archive.tar"
    assert record.extension == "gz"


@pytest.mark.parametrize("name", ["", "document.pdf", "20250101T000000-single.txt", "a__b--c.txt"])
def test_decode_rejects_malformed_names(name: str) -> None:
    with pytest.raises(MalformedNameError):
        decode(name)
    assert is_well_formed(name) is False


def test_malformed_error_is_value_error() -> None:
    with pytest.raises(ValueError):
        decode("plain.txt")


def test_round_trip_preserves_record() -> None:
    record = Record(
        identifier="20240229T235959",
        comment="leap day, final",
        tags=["b", "a"],
        extension="PDF",
    )

    decoded = decode(encode(record))

    assert decoded.identifier == record.identifier
    assert decoded.comment == record.comment
    assert decoded.extension == record.extension
    assert sorted(decoded.tags) == sorted(record.tags)


def test_encode_of_decoded_name_is_identity() -> None:
    name = "20250101T000000--multi__tag1_tag2__tag3_tag4.md"

    assert encode(decode(name)) == "20250101T000000--multi__tag1_tag2_tag3_tag4.md"
    simple = "20250101T000000--notes__a_b.txt"
    assert encode(decode(simple)) == simple


def test_comment_with_secondary_delimiter_does_not_round_trip() -> None:
    record = Record(identifier="20250101T000000", comment="left__right", extension="txt")

    decoded = decode(encode(record))

    assert decoded.comment == "left"
    assert decoded.tags == ["right"]


def test_split_extension() -> None:
    assert split_extension("report.PDF") == ("report", "PDF")
    assert split_extension("README") == ("README", "")
    assert split_extension(".gitignore") == ("", "gitignore")


def test_matches_extensions_is_case_insensitive() -> None:
    assert matches_extensions("report.PDF", ["pdf"])
    assert matches_extensions("report.pdf", [".PDF"])
    assert not matches_extensions("report.txt", ["pdf"])
    assert not matches_extensions("README", ["pdf"])


def test_matches_extensions_empty_filter_matches_everything() -> None:
    assert matches_extensions("anything", [])
    assert matches_extensions("file.xyz", ())


def test_normalize_extensions_splits_commas_and_strips_dots() -> None:
    assert normalize_extensions(["pdf,txt", ".md", " pdf "]) == ["pdf", "txt", "md"]


def test_record_is_immutable_value() -> None:
    record = Record(identifier="20250101T000000", comment="x", tags=["a"])
    updated = record.with_tags(["b"])

    assert record.tags == ["a"]
    assert updated.tags == ["b"]
    assert record.same_tags(["a", "a"])
