"""Unit tests for Whisper JSON loading and schema validation.

WHY: Bad input must be rejected before any subtitle logic runs, with a
message that points at the offending field.

HOW: Valid and broken documents are passed to parse_whisper_output(),
loads_whisper_json() and load_whisper_json() (via tmp_path files).
"""

import json

import pytest

from whisper_sort_srt.core.ir import WhisperOutput, Word
from whisper_sort_srt.core.loader import (
    WhisperInputError,
    load_whisper_json,
    loads_whisper_json,
    parse_whisper_output,
)


class TestValidInput:
    def test_builds_ir(self, sample_whisper_dict):
        result = parse_whisper_output(sample_whisper_dict)

        assert isinstance(result, WhisperOutput)
        assert result.language == "zh"
        assert len(result.segments) == 2
        assert result.segments[1].id == 1
        assert result.segments[1].words[2] == Word(start=10.6, end=10.8, text="。")

    def test_word_text_kept_verbatim(self):
        data = {
            "text": " Hello",
            "segments": [{
                "id": 0, "start": 0, "end": 1, "text": " Hello",
                "words": [{"start": 0, "end": 1, "word": " Hello"}],
            }],
        }
        result = parse_whisper_output(data)
        word = result.segments[0].words[0]
        assert word.text == " Hello"
        assert isinstance(word.start, float)

    def test_language_optional(self, sample_whisper_dict):
        del sample_whisper_dict["language"]
        assert parse_whisper_output(sample_whisper_dict).language is None

    def test_empty_words_allowed(self, sample_whisper_dict):
        sample_whisper_dict["segments"][1]["words"] = []
        result = parse_whisper_output(sample_whisper_dict)
        assert result.segments[1].words == []

    def test_loads_from_string(self, sample_whisper_dict):
        raw = json.dumps(sample_whisper_dict, ensure_ascii=False)
        assert len(loads_whisper_json(raw).segments) == 2

    def test_load_from_file(self, tmp_path, sample_whisper_dict):
        path = tmp_path / "talk.json"
        path.write_text(json.dumps(sample_whisper_dict, ensure_ascii=False), encoding="utf-8")
        result = load_whisper_json(path)
        assert result.text == sample_whisper_dict["text"]


class TestInvalidInput:
    def test_missing_words(self, sample_whisper_dict):
        del sample_whisper_dict["segments"][0]["words"]
        with pytest.raises(WhisperInputError, match="segments/0.*'words' is a required property"):
            parse_whisper_output(sample_whisper_dict)

    def test_string_timestamp(self, sample_whisper_dict):
        sample_whisper_dict["segments"][1]["words"][0]["start"] = "10.2"
        with pytest.raises(WhisperInputError, match="segments/1/words/0/start"):
            parse_whisper_output(sample_whisper_dict)

    def test_not_an_object(self):
        with pytest.raises(WhisperInputError, match="<root>"):
            parse_whisper_output([1, 2, 3])

    def test_bad_json(self):
        with pytest.raises(WhisperInputError, match="Could not parse JSON"):
            loads_whisper_json('{"text": "abc", "segments": [')

    def test_missing_file(self, tmp_path):
        with pytest.raises(WhisperInputError, match="Could not read"):
            load_whisper_json(tmp_path / "missing.json")

    def test_unknown_encoding(self, tmp_path, sample_whisper_dict):
        path = tmp_path / "talk.json"
        path.write_text(json.dumps(sample_whisper_dict), encoding="utf-8")
        with pytest.raises(WhisperInputError, match="Could not read"):
            load_whisper_json(path, encoding="no-such-codec")

    def test_is_a_value_error(self):
        assert issubclass(WhisperInputError, ValueError)
