"""Shared test fixtures for the whisper_sort_srt test suite.

WHY: Most test modules need the same handful of inputs: word lists with
regular timing, a small Whisper JSON document, and tokenizers that do not
need the jieba dictionary. Centralizing them keeps expected values in one
place.

HOW: The data and stub classes live in helpers.py; this module exposes them
as pytest fixtures.
"""

import copy

import pytest

from whisper_sort_srt.config import resolve_config

from helpers import SAMPLE_WHISPER, CharTokenizer


@pytest.fixture
def config():
    """A private copy of the default preset."""
    return resolve_config("default")


@pytest.fixture
def sample_whisper_dict():
    return copy.deepcopy(SAMPLE_WHISPER)


@pytest.fixture
def char_tokenizer():
    return CharTokenizer()
