"""Greedy line splitting of one Whisper segment into subtitle lines.

WHY: A Whisper segment can run for 30 seconds and a hundred characters,
far too much for one subtitle. Viewers read best when lines break at
punctuation and stay under a fixed length, and a forced break must never cut
a word in half.

HOW: Walk the word tokens once, appending each token to the current line.
After each token, decide whether to break:
  (a) punctuation break: the token contains punctuation and the line has
      reached min_line_chars;
  (b) forced break: the line has reached max_line_chars or runs longer
      than max_line_duration, the token is not a number, and the token ends
      a tokenizer segment (alignment flag).
A very short remainder at the end is folded into the previous line.

RULES:
- Segments with at most max_line_chars word tokens are emitted whole
  (token count, not character count)
- Numeric tokens (digits, ".", "-") never trigger a forced break
- Line text is stripped; start/end come from the first/last word of the line
- Word tokens and alignment flags are read-only
"""

from __future__ import annotations

import logging
from typing import Any, Dict, FrozenSet, List, Optional, Sequence

from whisper_sort_srt.core.aligner import segment_flags
from whisper_sort_srt.core.ir import Segment, SubtitleLine, Word
from whisper_sort_srt.core.tokenizer import Tokenizer, get_default_tokenizer

logger = logging.getLogger(__name__)

# Chinese and Western sentence/clause punctuation, quotes and brackets, space
PUNCTUATION: FrozenSet[str] = frozenset(
    "，,。！？；：、…—（）《》“”‘’\"'"
    ".!?;:"
    " "
)

_NUMERIC_CHARS: FrozenSet[str] = frozenset("0123456789.-")


def is_numeric(text: str) -> bool:
    """True if every character is an ASCII digit, "." or "-"."""
    return all(c in _NUMERIC_CHARS for c in text)


def has_punctuation(text: str) -> bool:
    return any(c in PUNCTUATION for c in text)


def split_words(
    words: Sequence[Word],
    flags: Sequence[bool],
    config: Dict[str, Any],
) -> List[SubtitleLine]:
    """Split one utterance's word tokens into subtitle lines.

    Args:
        words: Word tokens of one Whisper segment.
        flags: Alignment flags from align_tokens(), one per word.
        config: Config dict with max_line_chars, min_line_chars and
            max_line_duration.

    Returns:
        Ordered subtitle lines; empty only when ``words`` is empty.
    """
    if not words:
        return []

    max_chars = config["max_line_chars"]
    min_chars = config["min_line_chars"]
    max_duration = config["max_line_duration"]

    if len(words) <= max_chars:
        return [_whole_line(words)]

    result: List[SubtitleLine] = []
    buffer: List[str] = []
    char_count = 0
    line_start = words[0].start

    for i, word in enumerate(words):
        buffer.append(word.text)
        char_count += len(word.text)
        duration = word.end - line_start

        punct_break = has_punctuation(word.text) and char_count >= min_chars
        forced_break = (
            (char_count >= max_chars or duration > max_duration)
            and not is_numeric(word.text)
            and flags[i]
        )

        if punct_break or forced_break:
            result.append(SubtitleLine(
                text="".join(buffer).strip(),
                start_time=line_start,
                end_time=word.end,
            ))
            buffer = []
            char_count = 0
            if i + 1 < len(words):
                line_start = words[i + 1].start

    if buffer:
        tail = "".join(buffer).strip()
        last_end = words[-1].end
        if char_count <= min_chars // 2 and result:
            prev = result.pop()
            result.append(SubtitleLine(
                text=prev.text + tail,
                start_time=prev.start_time,
                end_time=last_end,
            ))
        else:
            result.append(SubtitleLine(
                text=tail,
                start_time=line_start,
                end_time=last_end,
            ))

    return result


def _whole_line(words: Sequence[Word]) -> SubtitleLine:
    return SubtitleLine(
        text="".join(w.text for w in words).strip(),
        start_time=words[0].start,
        end_time=words[-1].end,
    )


def split_segment(
    segment: Segment,
    config: Dict[str, Any],
    tokenizer: Optional[Tokenizer] = None,
) -> List[SubtitleLine]:
    """Split a Whisper segment, running the tokenizer only when needed.

    Short segments take the whole-line path and never touch the tokenizer,
    so the jieba dictionary is not loaded for transcripts made only of
    short segments.
    """
    words = segment.words
    if not words:
        logger.debug("Segment %s has no words, skipping", segment.id)
        return []
    if len(words) <= config["max_line_chars"]:
        return [_whole_line(words)]

    if tokenizer is None:
        tokenizer = get_default_tokenizer()
    flags = segment_flags(words, tokenizer)
    lines = split_words(words, flags, config)
    logger.debug("Segment %s: %d words -> %d lines", segment.id, len(words), len(lines))
    return lines
