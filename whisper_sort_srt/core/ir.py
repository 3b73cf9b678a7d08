"""Intermediate representation dataclasses for Whisper transcripts and subtitles.

WHY: Whisper returns nested JSON (segments with word-level timestamps).
The splitter, merger and SRT renderer all need the same typed view of that
data, plus a typed view of the subtitle lines they pass between each other.
The IR decouples JSON loading from subtitle construction.

HOW: Two groups of dataclasses:
  Word, Segment, WhisperOutput: read-only transcription input
  SubtitleLine, SubtitleBlock : subtitle output at two stages
    (lines before numbering, blocks after numbering)

RULES:
- Input dataclasses are frozen; the pipeline never mutates them
- All times are float seconds
- SubtitleLine text is stripped when created; a "\\n" inside it separates
  the visual lines of one block
- SubtitleBlock.index is 1-based and assigned only at emission time
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(frozen=True)
class Word:
    """A single timestamped word token from Whisper.

    Attributes:
        start: Start time in seconds.
        end: End time in seconds (start <= end).
        text: Surface text exactly as Whisper emitted it, including any
            leading space (JSON key ``word``).
    """

    start: float
    end: float
    text: str


@dataclass(frozen=True)
class Segment:
    """One Whisper segment (utterance) with its word tokens.

    ``start``, ``end`` and ``text`` are redundant with ``words`` and kept
    only for reference; the pipeline reads ``words``.
    """

    id: int
    start: float
    end: float
    text: str
    words: List[Word] = field(default_factory=list)


@dataclass(frozen=True)
class WhisperOutput:
    """The complete Whisper transcription result."""

    text: str
    segments: List[Segment] = field(default_factory=list)
    language: Optional[str] = None


@dataclass(frozen=True)
class SubtitleLine:
    """A subtitle line produced by the splitter and consumed by the merger.

    RULES:
    - start_time <= end_time
    - text is non-empty after stripping (guaranteed by the splitter)
    - A merged line may hold two visual lines separated by "\\n"
    """

    text: str
    start_time: float
    end_time: float

    @property
    def duration(self) -> float:
        return self.end_time - self.start_time

    @property
    def line_count(self) -> int:
        """Number of visual lines (explicit line breaks + 1)."""
        return self.text.count("\n") + 1


@dataclass(frozen=True)
class SubtitleBlock:
    """A numbered SRT record, ready for rendering."""

    index: int
    start_time: float
    end_time: float
    text: str
