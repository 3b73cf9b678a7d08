"""Language-aware text segmentation backed by jieba.

WHY: Whisper's word tokens do not follow Chinese word boundaries; a
two-character word is often split across two tokens, and numbers are chopped
differently again. The line splitter must never force a break in the middle
of a word, so it needs an independent opinion on where words end.

HOW: JiebaTokenizer wraps a private jieba.Tokenizer instance in precise mode
with HMM disabled. Its segment() method returns substrings whose
concatenation reproduces the input. get_default_tokenizer() builds one
instance per process on first use (loading the jieba dictionary takes about a
second) and hands out the same instance afterwards.

RULES:
- Anything with a segment(text) -> list[str] method can stand in for the
  tokenizer (tests use stubs)
- The jieba model is loaded lazily and never mutated after loading
- An optional user dictionary is loaded once, at initialisation
"""

from __future__ import annotations

import logging
import threading
from typing import List, Optional, Protocol

import jieba

from whisper_sort_srt.config import JIEBA_USER_DICT

logger = logging.getLogger(__name__)

# jieba logs dictionary loading at DEBUG to its own stderr handler
jieba.setLogLevel(logging.WARNING)


class Tokenizer(Protocol):
    """Anything that splits text into segments covering the whole input."""

    def segment(self, text: str) -> List[str]: ...


class JiebaTokenizer:
    """Chinese word segmentation via jieba (precise mode, no HMM)."""

    def __init__(self, user_dict: Optional[str] = None) -> None:
        self._user_dict = user_dict
        self._jieba: Optional[jieba.Tokenizer] = None
        self._lock = threading.Lock()

    def _get_jieba(self) -> jieba.Tokenizer:
        if self._jieba is None:
            with self._lock:
                if self._jieba is None:
                    tk = jieba.Tokenizer()
                    tk.initialize()
                    if self._user_dict:
                        logger.debug("Loading jieba user dictionary %s", self._user_dict)
                        tk.load_userdict(self._user_dict)
                    self._jieba = tk
        return self._jieba

    def segment(self, text: str) -> List[str]:
        """Split text into natural-language segments.

        The concatenation of the returned list equals ``text``.
        """
        if not text:
            return []
        return list(self._get_jieba().cut(text, cut_all=False, HMM=False))


_DEFAULT_TOKENIZER: Optional[JiebaTokenizer] = None
_DEFAULT_LOCK = threading.Lock()


def get_default_tokenizer() -> JiebaTokenizer:
    """Return the process-wide tokenizer, creating it on first call."""
    global _DEFAULT_TOKENIZER
    if _DEFAULT_TOKENIZER is None:
        with _DEFAULT_LOCK:
            if _DEFAULT_TOKENIZER is None:
                _DEFAULT_TOKENIZER = JiebaTokenizer(user_dict=JIEBA_USER_DICT)
    return _DEFAULT_TOKENIZER
