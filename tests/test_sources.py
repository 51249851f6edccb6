"""Tests for input sources."""

from __future__ import annotations

import json

import pytest

from qa2table.exceptions import InputError
from qa2table.sources import JsonListSource, TextFileSource, create_source


class TestTextFileSource:
    def test_load_chunks_file(self, tmp_path):
        path = tmp_path / "test.txt"
        path.write_text("Intro line\nmore\n\nSecond section\n\nTail\n")

        assert TextFileSource(path).load() == ["Intro line\nmore\n", "Second section\n"]

    def test_flush_trailing(self, tmp_path):
        path = tmp_path / "test.txt"
        path.write_text("A\n\nTail\n")

        assert TextFileSource(path, flush_trailing=True).load() == ["A\n", "Tail\n"]

    def test_missing_file_raises_input_error(self, tmp_path):
        with pytest.raises(InputError, match="Cannot read input file"):
            TextFileSource(tmp_path / "missing.txt").load()


class TestJsonListSource:
    def test_load_list(self, tmp_path):
        path = tmp_path / "chapter.json"
        path.write_text(json.dumps(["first section", "second section"]))

        assert JsonListSource(path).load() == ["first section", "second section"]

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "chapter.json"
        path.write_text("[not json")

        with pytest.raises(InputError, match="Failed to parse JSON"):
            JsonListSource(path).load()

    @pytest.mark.parametrize("data", [{"a": "b"}, ["ok", 3], "text"])
    def test_wrong_shape(self, tmp_path, data):
        path = tmp_path / "chapter.json"
        path.write_text(json.dumps(data))

        with pytest.raises(InputError, match="JSON list of strings"):
            JsonListSource(path).load()

    def test_missing_file(self, tmp_path):
        with pytest.raises(InputError):
            JsonListSource(tmp_path / "missing.json").load()


def test_create_source():
    text_source = create_source("text", "in.txt", flush_trailing=True)
    assert isinstance(text_source, TextFileSource)
    assert text_source.flush_trailing is True

    assert isinstance(create_source("JSON", "in.json"), JsonListSource)

    with pytest.raises(ValueError, match="Unsupported input format"):
        create_source("csv", "in.csv")
