"""Test data and stub tokenizers shared by the test modules.

HOW: make_words() builds Word lists with back-to-back timing. The stub
tokenizers stand in for jieba so most tests never load its dictionary.
conftest.py wraps the commonly used pieces as fixtures.

RULES:
- SAMPLE_WHISPER segment 0 has 20 one-character words, 0.5 s each, with a
  comma as word 11; segment 1 is a short "好的。" reply
- Stub tokenizers honour the tokenizer contract: the concatenation of the
  returned segments equals the input text
"""

from typing import Any, Dict, List, Sequence

from whisper_sort_srt.core.ir import Word


FIRST_CLAUSE = list("甲乙丙丁戊己庚辛壬癸") + ["，"]
SECOND_CLAUSE = list("子丑寅卯辰巳午未申")


def make_words(texts: Sequence[str], start: float = 0.0, dur: float = 0.5, gap: float = 0.0) -> List[Word]:
    """Build Word objects with back-to-back timing."""
    words = []  # type: List[Word]
    t = start
    for text in texts:
        words.append(Word(start=t, end=t + dur, text=text))
        t += dur + gap
    return words


class CharTokenizer:
    """Splits text into single characters: every one-char word ends a segment."""

    def segment(self, text):
        return list(text)


class WholeTextTokenizer:
    """Treats the whole text as one segment: only the last word ends it."""

    def segment(self, text):
        return [text] if text else []


class RecordingTokenizer:
    """Wraps another tokenizer and records every text it was asked to split."""

    def __init__(self, inner=None):
        self.inner = inner or CharTokenizer()
        self.calls = []  # type: List[str]

    def segment(self, text):
        self.calls.append(text)
        return self.inner.segment(text)


class FailingTokenizer:
    """Raises if used; proves a code path never needs word boundaries."""

    def segment(self, text):
        raise AssertionError("tokenizer should not be called")


def _word_dicts(texts, start, dur=0.5):
    return [
        {"start": start + i * dur, "end": start + (i + 1) * dur, "word": t}
        for i, t in enumerate(texts)
    ]


SAMPLE_WHISPER: Dict[str, Any] = {
    "text": "甲乙丙丁戊己庚辛壬癸，子丑寅卯辰巳午未申好的。",
    "language": "zh",
    "segments": [
        {
            "id": 0,
            "seek": 0,
            "start": 0.0,
            "end": 10.0,
            "text": "甲乙丙丁戊己庚辛壬癸，子丑寅卯辰巳午未申",
            "avg_logprob": -0.2,
            "words": _word_dicts(FIRST_CLAUSE + SECOND_CLAUSE, 0.0),
        },
        {
            "id": 1,
            "seek": 0,
            "start": 10.2,
            "end": 10.8,
            "text": "好的。",
            "words": [
                {"start": 10.2, "end": 10.4, "word": "好", "probability": 0.9},
                {"start": 10.4, "end": 10.6, "word": "的", "probability": 0.9},
                {"start": 10.6, "end": 10.8, "word": "。", "probability": 0.9},
            ],
        },
    ],
}

SAMPLE_SRT = (
    "1\n"
    "00:00:00,000 --> 00:00:05,500\n"
    "甲乙丙丁戊己庚辛壬癸，\n"
    "\n"
    "2\n"
    "00:00:05,500 --> 00:00:10,800\n"
    "子丑寅卯辰巳午未申好的。\n"
    "\n"
)
