"""End-to-end subtitle pipeline: WhisperOutput -> subtitle blocks -> SRT.

WHY: The CLI and library callers need one call that runs every stage in the
right order with one config dict, instead of wiring splitter, merger and
renderer by hand.

HOW: Each Whisper segment is split independently (tokenizer alignment is
per segment), the lines of all segments are concatenated in order, the
merger runs once over the whole list, and the result is numbered and
rendered.

RULES:
- config is a dict from config.resolve_config() (or an equivalent copy)
- config["merge_blocks"] False skips the merge pass
- The tokenizer is only created if some segment needs it
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from whisper_sort_srt.core.ir import SubtitleBlock, SubtitleLine, WhisperOutput
from whisper_sort_srt.core.merger import merge_blocks
from whisper_sort_srt.core.splitter import split_segment
from whisper_sort_srt.core.tokenizer import Tokenizer
from whisper_sort_srt.formatters.srt import number_blocks, render_srt


def build_lines(
    whisper_output: WhisperOutput,
    config: Dict[str, Any],
    tokenizer: Optional[Tokenizer] = None,
) -> List[SubtitleLine]:
    """Split every segment and, unless disabled, merge short blocks."""
    lines: List[SubtitleLine] = []
    for segment in whisper_output.segments:
        lines.extend(split_segment(segment, config, tokenizer))

    if config.get("merge_blocks", True):
        lines = merge_blocks(lines, config)
    return lines


def build_blocks(
    whisper_output: WhisperOutput,
    config: Dict[str, Any],
    tokenizer: Optional[Tokenizer] = None,
) -> List[SubtitleBlock]:
    return number_blocks(build_lines(whisper_output, config, tokenizer))


def build_srt(
    whisper_output: WhisperOutput,
    config: Dict[str, Any],
    tokenizer: Optional[Tokenizer] = None,
) -> str:
    return render_srt(build_blocks(whisper_output, config, tokenizer))
