"""SRT timestamp formatting and rendering.

WHY: SRT is the only output format. Players expect the exact
"HH:MM:SS,mmm --> HH:MM:SS,mmm" timestamp layout and a blank line after
every block.

HOW: format_time() converts float seconds to a timestamp; number_blocks()
assigns 1-based indices; render_srt() joins the blocks into file content.

RULES:
- Milliseconds are rounded half-up, then floored to a multiple of 10
- A rounded value of 1000 ms carries into the seconds field
- Negative times are clamped to zero
- Indices are 1-based and follow input order
- Every block ends with a blank line
"""

from __future__ import annotations

import math
from typing import List, Sequence

from whisper_sort_srt.core.ir import SubtitleBlock, SubtitleLine


def format_time(seconds: float) -> str:
    """Convert seconds to an SRT timestamp: HH:MM:SS,mmm

    >>> format_time(3661.2396)
    '01:01:01,240'
    """
    seconds = max(0.0, seconds)
    whole = int(seconds)
    millis = int(math.floor((seconds - whole) * 1000 + 0.5)) // 10 * 10
    if millis >= 1000:
        whole += 1
        millis -= 1000

    hours = whole // 3600
    minutes = (whole % 3600) // 60
    secs = whole % 60
    return "{:02d}:{:02d}:{:02d},{:03d}".format(hours, minutes, secs, millis)


def number_blocks(lines: Sequence[SubtitleLine]) -> List[SubtitleBlock]:
    return [
        SubtitleBlock(
            index=i,
            start_time=line.start_time,
            end_time=line.end_time,
            text=line.text,
        )
        for i, line in enumerate(lines, 1)
    ]


def render_block(block: SubtitleBlock) -> str:
    return "{}\n{} --> {}\n{}\n\n".format(
        block.index,
        format_time(block.start_time),
        format_time(block.end_time),
        block.text,
    )


def render_srt(blocks: Sequence[SubtitleBlock]) -> str:
    """Render numbered blocks as SRT file content."""
    return "".join(render_block(b) for b in blocks)
