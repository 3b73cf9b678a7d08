"""Merging of short subtitle blocks into their neighbours.

WHY: The splitter works one Whisper segment at a time, and Whisper often
emits tiny segments ("嗯。", "Hi") that flash on screen for half a second.
Folding such blocks into an adjacent block gives viewers time to read them.

HOW: A left-to-right fold with one bit of carried state, prev_need_merge,
True when the last emitted block was itself too short and may absorb the
next one. A block is merged into the last emitted block when either of them
is short, the gap between them is small, and the emitted block still has
room for another visual line.

RULES:
- "Short" means duration < min_block_duration
- Merge only if gap < max_merge_gap and the emitted block has fewer than
  max_block_lines visual lines
- Combined text goes on a new visual line when it would exceed
  max_line_chars, otherwise it is appended on the same line
- Identical adjacent texts collapse to one copy
- A merged block ends at the later of the two end times
- After a merge prev_need_merge resets to False
- Input lines are never mutated; merged lines are new objects
"""

from __future__ import annotations

import dataclasses
import logging
from typing import Any, Dict, List, Sequence

from whisper_sort_srt.core.ir import SubtitleLine

logger = logging.getLogger(__name__)


def needs_merge(line: SubtitleLine, config: Dict[str, Any]) -> bool:
    return line.duration < config["min_block_duration"]


def combine_text(prev: str, current: str, max_line_chars: int) -> str:
    """Join two block texts, on one line if they fit, else on two."""
    if prev == current:
        return prev
    if len(prev) + len(current) > max_line_chars:
        return "{}\n{}".format(prev, current)
    return prev + current


def merge_blocks(
    lines: Sequence[SubtitleLine],
    config: Dict[str, Any],
) -> List[SubtitleLine]:
    """Merge adjacent short subtitle lines.

    Args:
        lines: All subtitle lines of the transcript, in time order.
        config: Config dict with min_block_duration, max_merge_gap,
            max_block_lines and max_line_chars.

    Returns:
        A list no longer than ``lines``, in the same order.
    """
    merged: List[SubtitleLine] = []
    prev_need_merge = False

    for line in lines:
        if merged:
            prev = merged[-1]
            gap = line.start_time - prev.end_time
            if (
                (prev_need_merge or needs_merge(line, config))
                and gap < config["max_merge_gap"]
                and prev.line_count < config["max_block_lines"]
            ):
                merged[-1] = dataclasses.replace(
                    prev,
                    text=combine_text(prev.text, line.text, config["max_line_chars"]),
                    end_time=max(prev.end_time, line.end_time),
                )
                prev_need_merge = False
                continue

        merged.append(line)
        prev_need_merge = needs_merge(line, config)

    if len(merged) != len(lines):
        logger.debug("Merged %d lines into %d blocks", len(lines), len(merged))
    return merged
