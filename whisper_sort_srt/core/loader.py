"""Loading and validation of Whisper JSON output.

WHY: The pipeline assumes every segment has a words array and every word
has numeric timestamps. Whisper runs without word_timestamps=True, or JSON
from other tools, break that assumption in ways that would otherwise surface
as a KeyError deep inside the splitter.

HOW: The raw JSON is parsed, validated against whisper_output_schema.json
with jsonschema, and converted into the frozen IR dataclasses.

RULES:
- Any parse or schema failure raises WhisperInputError (a ValueError)
- Unknown keys are ignored (Whisper adds tokens, avg_logprob, ...)
- Word text is kept verbatim, leading spaces included
- Validation happens before any subtitle logic runs
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

import jsonschema

from whisper_sort_srt.config import DEFAULT_ENCODING
from whisper_sort_srt.core.ir import Segment, WhisperOutput, Word

logger = logging.getLogger(__name__)

_SCHEMA_PATH = Path(__file__).resolve().parent / "whisper_output_schema.json"

_CACHED_SCHEMA: Optional[Dict[str, Any]] = None


class WhisperInputError(ValueError):
    """Raised when input cannot be read as Whisper JSON with word timestamps."""


def _get_schema() -> Dict[str, Any]:
    global _CACHED_SCHEMA
    if _CACHED_SCHEMA is None:
        with open(_SCHEMA_PATH, encoding="utf-8") as f:
            _CACHED_SCHEMA = json.load(f)
    return _CACHED_SCHEMA


def parse_whisper_output(data: Any) -> WhisperOutput:
    """Validate decoded JSON and convert it into a WhisperOutput.

    Args:
        data: Decoded JSON document.

    Returns:
        The WhisperOutput IR.

    Raises:
        WhisperInputError: If the document does not match the schema.
    """
    try:
        jsonschema.validate(instance=data, schema=_get_schema())
    except jsonschema.ValidationError as e:
        location = "/".join(str(p) for p in e.absolute_path) or "<root>"
        raise WhisperInputError(
            "Invalid Whisper output at {}: {}".format(location, e.message)
        ) from e

    segments = [
        Segment(
            id=seg["id"],
            start=float(seg["start"]),
            end=float(seg["end"]),
            text=seg["text"],
            words=[
                Word(start=float(w["start"]), end=float(w["end"]), text=w["word"])
                for w in seg["words"]
            ],
        )
        for seg in data["segments"]
    ]
    return WhisperOutput(
        text=data["text"],
        segments=segments,
        language=data.get("language"),
    )


def loads_whisper_json(raw: str) -> WhisperOutput:
    """Parse Whisper JSON text."""
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise WhisperInputError("Could not parse JSON input: {}".format(e)) from e
    return parse_whisper_output(data)


def load_whisper_json(
    path: Union[str, Path],
    encoding: str = DEFAULT_ENCODING,
) -> WhisperOutput:
    """Read and parse a Whisper JSON file.

    Raises:
        WhisperInputError: If the file cannot be read or parsed.
    """
    path = Path(path)
    try:
        raw = path.read_text(encoding=encoding)
    except (OSError, UnicodeDecodeError, LookupError) as e:
        raise WhisperInputError("Could not read {}: {}".format(path, e)) from e

    logger.debug("Loaded %d bytes from %s", len(raw), path)
    return loads_whisper_json(raw)
