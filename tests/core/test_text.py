from __future__ import annotations

import pytest

from relay.core.text import to_well_formed


@pytest.mark.parametrize("text", ["", "hello", "héllo ✓ 你好", "\U0001f600"])
def test_well_formed_text_is_unchanged(text: str) -> None:
    assert to_well_formed(text) == text


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("\ud800", "\ufffd"),
        ("a\udc00b", "a\ufffdb"),
        ("\udc00\ud800", "\ufffd\ufffd"),
    ],
)
def test_lone_surrogates_become_replacement_character(text: str, expected: str) -> None:
    result = to_well_formed(text)

    assert result == expected
    result.encode("utf-8")
