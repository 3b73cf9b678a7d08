"""Alignment of tokenizer segments onto Whisper word tokens.

WHY: The line splitter may only force a break where a real word ends. Whisper
and jieba chop the same text differently (Whisper splits by acoustic token,
jieba by dictionary word), so jieba's boundaries have to be mapped back onto
Whisper's timestamped tokens before the splitter can use them.

HOW: A two-pointer greedy walk over character counts. One running count
covers the current jieba segment(s), the other the current Whisper token(s).
Whichever side is shorter pulls in its next element until both counts are
equal. At that point a segment boundary coincides with the end of the
current Whisper token, and that token's flag is set.

RULES:
- Counts are in characters (code points), never bytes
- The walk stops as soon as either side is exhausted; remaining flags
  stay False
- If the two sides disagree on total length the result is best effort,
  never an error
- Inputs are never mutated
"""

from __future__ import annotations

import logging
from typing import List, Sequence

from whisper_sort_srt.core.ir import Word
from whisper_sort_srt.core.tokenizer import Tokenizer

logger = logging.getLogger(__name__)


def align_tokens(words: Sequence[Word], segments: Sequence[str]) -> List[bool]:
    """Flag each word token that ends a tokenizer segment.

    Args:
        words: Whisper word tokens of one utterance.
        segments: Tokenizer output for the concatenated word texts.

    Returns:
        One bool per word; True where a segment boundary falls exactly at
        the end of that word.
    """
    flags = [False] * len(words)
    n_words = len(words)
    n_segments = len(segments)
    w_idx = 0
    s_idx = 0

    while s_idx < n_segments and w_idx < n_words:
        seg_acc = len(segments[s_idx])
        s_idx += 1
        word_acc = len(words[w_idx].text)
        w_idx += 1

        while True:
            if seg_acc == word_acc:
                flags[w_idx - 1] = True
                break
            if seg_acc > word_acc:
                # One segment spans several word tokens
                if w_idx >= n_words:
                    break
                word_acc += len(words[w_idx].text)
                w_idx += 1
            else:
                # One word token spans several segments
                if s_idx >= n_segments:
                    break
                seg_acc += len(segments[s_idx])
                s_idx += 1

    if logger.isEnabledFor(logging.DEBUG):
        seg_total = sum(len(s) for s in segments)
        word_total = sum(len(w.text) for w in words)
        if seg_total != word_total:
            logger.debug(
                "Alignment length mismatch: %d segment chars vs %d word chars",
                seg_total, word_total,
            )

    return flags


def segment_flags(words: Sequence[Word], tokenizer: Tokenizer) -> List[bool]:
    """Tokenize the utterance text and align the result onto its words."""
    text = "".join(w.text for w in words)
    return align_tokens(words, tokenizer.segment(text))
