"""Tests for splitting text into sections."""

from __future__ import annotations

import pytest

from qa2table.qa.chunker import split_text_into_chunks


def test_trailing_section_without_blank_line_is_dropped():
    """The last section is only emitted when a blank line follows it."""
    assert split_text_into_chunks("A\nB\n\nC\n") == ["A\nB\n"]


def test_flush_trailing_keeps_last_section():
    assert split_text_into_chunks("A\nB\n\nC\n", flush_trailing=True) == [
        "A\nB\n",
        "C\n",
    ]


def test_single_section_needs_closing_blank_line():
    assert split_text_into_chunks("one\ntwo\n") == []
    assert split_text_into_chunks("one\ntwo\n\n") == ["one\ntwo\n"]


def test_empty_input():
    assert split_text_into_chunks("") == []
    assert split_text_into_chunks("", flush_trailing=True) == []


def test_multiple_blank_lines_do_not_create_empty_chunks():
    text = "\n\n  \nA\n\n\n\t\nB\n\n"
    assert split_text_into_chunks(text) == ["A\n", "B\n"]


def test_whitespace_only_lines_separate_sections():
    assert split_text_into_chunks("A\n   \nB\n \n") == ["A\n", "B\n"]


def test_lines_kept_verbatim():
    text = "  indented line  \nnext\n\n"
    assert split_text_into_chunks(text) == ["  indented line  \nnext\n"]


def test_crlf_line_endings():
    assert split_text_into_chunks("A\r\nB\r\n\r\nC\r\n") == ["A\nB\n"]


def test_text_without_final_newline():
    assert split_text_into_chunks("A\n\nB") == ["A\n"]
    assert split_text_into_chunks("A\n\nB", flush_trailing=True) == ["A\n", "B\n"]


@pytest.mark.parametrize(
    "text",
    ["", "\n", "a", "a\n\n", "\n\na\n\n\nb\n \nc", "x\r\n\r\n\r\ny\n\n"],
)
@pytest.mark.parametrize("flush_trailing", [False, True])
def test_never_produces_blank_chunks(text, flush_trailing):
    for chunk in split_text_into_chunks(text, flush_trailing=flush_trailing):
        assert chunk.strip()
        assert chunk.endswith("\n")
