"""Configuration presets, environment defaults, and .env loading.

WHY: Line-length and timing limits depend on where the subtitles are shown
(a 16:9 player fits more characters than a vertical phone video). Keeping
the limits as plain preset dicts lets callers pick a preset by name, tweak a
single value, and run several configurations side by side without global
state.

HOW: python-dotenv loads the .env file on import. Each preset is a plain
dict; resolve_config() deep-copies one and applies overrides. Environment
variables provide CLI defaults (preset name, log level, jieba dictionary,
output encoding).

RULES:
- Presets are frozen constants: never mutate them at runtime
- resolve_config() always returns a fresh copy
- Override keys must already exist in the preset
- "short" is an alias for "vertical"
"""

from __future__ import annotations

import copy
import os
from typing import Any, Dict, Optional

from dotenv import load_dotenv

# Load .env from the working directory (where the tool is run from)
load_dotenv()

# ---------------------------------------------------------------------------
# Presets
# ---------------------------------------------------------------------------

# Standard 16:9 player, Chinese subtitles
PRESET_DEFAULT: Dict[str, Any] = {
    # Characters per line: a line should break once it reaches this length
    "max_line_chars": 16,
    # Characters per line: a punctuation break is honoured from this length
    "min_line_chars": 10,
    # Seconds per line: a line should break once it runs longer than this
    "max_line_duration": 10.0,
    # Blocks shorter than this (seconds) are merged into a neighbour
    "min_block_duration": 1.0,
    # Blocks further apart than this (seconds) are never merged
    "max_merge_gap": 1.0,
    # Visual lines per merged block
    "max_block_lines": 2,
    "merge_blocks": True,
}

# 9:16 vertical video, narrow lines
PRESET_VERTICAL: Dict[str, Any] = {
    "max_line_chars": 12,
    "min_line_chars": 8,
    "max_line_duration": 6.0,
    "min_block_duration": 1.0,
    "max_merge_gap": 1.0,
    "max_block_lines": 2,
    "merge_blocks": True,
}

PRESETS: Dict[str, Dict[str, Any]] = {
    "default": PRESET_DEFAULT,
    "vertical": PRESET_VERTICAL,
    "short": PRESET_VERTICAL,  # Alias
}

# ---------------------------------------------------------------------------
# Environment defaults
# ---------------------------------------------------------------------------

DEFAULT_PRESET = os.getenv("WHISPER_SRT_PRESET", "default")
DEFAULT_LOG_LEVEL = os.getenv("WHISPER_SRT_LOG_LEVEL", "WARNING").upper()
DEFAULT_ENCODING = os.getenv("WHISPER_SRT_ENCODING", "utf-8")
JIEBA_USER_DICT = os.getenv("WHISPER_SRT_JIEBA_DICT", "").strip() or None


def resolve_config(
    preset: str = "default",
    overrides: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """Return a private config dict for a preset, with overrides applied.

    WHY: Callers (CLI flags, library users) often want a preset with one or
    two values changed. Copying here keeps the preset constants untouched.

    RULES:
    - Raises ValueError for an unknown preset name
    - Raises ValueError for an override key the preset does not define
    - None values in overrides are ignored (unset CLI flags)

    Args:
        preset: Preset name ("default", "vertical", "short").
        overrides: Optional mapping of config keys to new values.

    Returns:
        A deep copy of the preset with overrides applied.
    """
    if preset not in PRESETS:
        raise ValueError(
            "Unknown preset '{}'. Available: {}".format(
                preset, ", ".join(PRESETS.keys())
            )
        )
    cfg = copy.deepcopy(PRESETS[preset])

    for key, value in (overrides or {}).items():
        if key not in cfg:
            raise ValueError("Unknown config key '{}'".format(key))
        if value is not None:
            cfg[key] = value

    return cfg
