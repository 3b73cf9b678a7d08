"""Whisper JSON to SRT subtitle converter with Chinese-aware line breaking.

WHY: Whisper's own SRT output follows its decoding segments, which are often
far too long for one subtitle and break in the middle of words. This package
rebuilds subtitles from Whisper's word-level timestamps, breaking lines at
punctuation, under length and duration limits, and only on jieba word
boundaries, then merges blocks that are too short to read.

HOW: Four-stage pipeline: load (JSON + schema validation), split (per
segment, aligned to jieba), merge (across segments), render (SRT). Each
stage is independently testable.

RULES:
- format_srt() is the public entry point for producing SRT text
- Preset names: "default" (16 chars/line), "vertical" (12 chars/line),
  "short" (alias for vertical)
- If config is given it replaces the preset entirely
- Never mutate the preset constants: resolve_config() copies them
"""

from __future__ import annotations

import copy
from typing import Any, Dict, List, Optional

from whisper_sort_srt.config import PRESETS, resolve_config
from whisper_sort_srt.core.ir import (
    Segment,
    SubtitleBlock,
    SubtitleLine,
    WhisperOutput,
    Word,
)
from whisper_sort_srt.core.loader import (
    WhisperInputError,
    load_whisper_json,
    loads_whisper_json,
)
from whisper_sort_srt.core.tokenizer import Tokenizer
from whisper_sort_srt.formatters.srt import format_time
from whisper_sort_srt.pipeline import build_blocks as _build_blocks
from whisper_sort_srt.pipeline import build_srt

__version__ = "0.1.0"

__all__ = [
    "format_srt",
    "subtitle_blocks",
    "format_time",
    "load_whisper_json",
    "loads_whisper_json",
    "WhisperInputError",
    "PRESETS",
    "Word",
    "Segment",
    "WhisperOutput",
    "SubtitleLine",
    "SubtitleBlock",
]


def _config_for(preset: str, config: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    if config is not None:
        return copy.deepcopy(config)
    return resolve_config(preset)


def subtitle_blocks(
    whisper_output: WhisperOutput,
    preset: str = "default",
    config: Optional[Dict[str, Any]] = None,
    tokenizer: Optional[Tokenizer] = None,
) -> List[SubtitleBlock]:
    """Build numbered subtitle blocks from a Whisper transcript.

    Same arguments as format_srt(); returns the blocks instead of SRT text.
    """
    return _build_blocks(whisper_output, _config_for(preset, config), tokenizer)


def format_srt(
    whisper_output: WhisperOutput,
    preset: str = "default",
    config: Optional[Dict[str, Any]] = None,
    tokenizer: Optional[Tokenizer] = None,
) -> str:
    """Format a Whisper transcript into an SRT subtitle string.

    WHY: Single entry point for library callers, so they never reach into
    the splitter or merger directly.

    RULES:
    - preset must be a key of PRESETS unless config is given
    - Returns "" when the transcript has no words
    - Thread-safe: each call works on its own config copy

    Args:
        whisper_output: Loaded Whisper transcript.
        preset: Preset name. Default: "default".
        config: Optional complete config dict; overrides the preset.
        tokenizer: Optional segmenter; defaults to the shared jieba tokenizer.

    Returns:
        SRT file content.

    Raises:
        ValueError: If the preset name is not recognized and no config is given.
    """
    return build_srt(whisper_output, _config_for(preset, config), tokenizer)
