from __future__ import annotations

import pytest

from folio.core.utils.attributes import call_or_return, from_string, merge_attributes


def test_call_or_return() -> None:
    assert call_or_return(5) == 5
    assert call_or_return(lambda: 5) == 5
    assert call_or_return(lambda a, b: a + b, 2, 3) == 5


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("3", 3),
        ("1.5", 1.5),
        ("true", True),
        ("null", None),
        ("left", "left"),
        ("", ""),
        (None, None),
        (7, 7),
    ],
)
def test_from_string(raw, expected) -> None:
    assert from_string(raw) == expected


def test_merge_attributes_concatenates_classes_without_duplicates() -> None:
    merged = merge_attributes({"class": "a b"}, {"class": "b c"}, None, {"class": ""})

    assert merged == {"class": "a b c"}


def test_merge_attributes_joins_styles() -> None:
    merged = merge_attributes({"style": "color: red"}, {"style": "font-weight: bold"}, {"style": None})

    assert merged == {"style": "color: red; font-weight: bold"}


def test_merge_attributes_later_plain_keys_win() -> None:
    assert merge_attributes({"id": "a", "href": "x"}, {"id": "b"}) == {"id": "b", "href": "x"}
