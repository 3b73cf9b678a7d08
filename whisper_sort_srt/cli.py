"""Command-line interface for the Whisper SRT converter.

WHY: Users convert Whisper JSON files from the terminal, usually a whole
folder of them after a batch transcription run. The CLI wires together
loading, splitting, merging and rendering behind a single command.

HOW: Uses argparse to accept one or more input files or directories, a
preset name with optional per-value overrides, and output options. Each
input is converted independently; a bad file is reported and skipped, and
the exit status reflects whether every file succeeded. Status messages go to
stderr; SRT content goes to files next to the inputs (or to --output,
--output-dir, or stdout).

RULES:
- Positional arguments: JSON files, or directories (every *.json inside,
  sorted by name)
- Default output path: input path with the suffix replaced by ".srt"
- --output is only valid with exactly one input file
- --no-clobber adds a numeric suffix instead of overwriting (-2.srt)
- Exit codes: 0 = success, 1 = any error, 2 = bad arguments (argparse),
  130 = interrupted
- A file that cannot be read or written is reported and skipped
- Status output goes to stderr (not stdout)
"""

from __future__ import annotations

import argparse
import codecs
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from whisper_sort_srt import __version__
from whisper_sort_srt.config import (
    DEFAULT_ENCODING,
    DEFAULT_LOG_LEVEL,
    DEFAULT_PRESET,
    PRESETS,
    resolve_config,
)
from whisper_sort_srt.core.loader import WhisperInputError, load_whisper_json
from whisper_sort_srt.pipeline import build_blocks
from whisper_sort_srt.formatters.srt import render_srt

logger = logging.getLogger(__name__)


def _status(msg: str) -> None:
    """Print a status message to stderr so stdout stays pipeable."""
    print(msg, file=sys.stderr, flush=True)


def _error(msg: str) -> None:
    print("Error: {}".format(msg), file=sys.stderr, flush=True)


def _configure_logging(verbose: int, quiet: bool) -> None:
    if quiet:
        level = logging.ERROR
    elif verbose >= 2:
        level = logging.DEBUG
    elif verbose == 1:
        level = logging.INFO
    else:
        level = getattr(logging, DEFAULT_LOG_LEVEL, logging.WARNING)

    logging.basicConfig(
        level=level,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def collect_inputs(paths: List[str]) -> List[Path]:
    """Expand the positional arguments into a list of JSON files.

    RULES:
    - Files are taken as given, in argument order
    - Directories contribute their *.json files, sorted by name
    - A path that does not exist raises FileNotFoundError

    Args:
        paths: Raw positional arguments.

    Returns:
        JSON file paths to convert.
    """
    inputs: List[Path] = []
    for raw in paths:
        path = Path(raw)
        if path.is_dir():
            inputs.extend(sorted(p for p in path.glob("*.json") if p.is_file()))
        elif path.is_file():
            inputs.append(path)
        else:
            raise FileNotFoundError("Input file {} does not exist".format(path))
    return inputs


def resolve_output_path(
    input_path: Path,
    output: Optional[str],
    output_dir: Optional[str],
    no_clobber: bool,
) -> Path:
    """Decide where the SRT for one input goes.

    WHY: Batch runs are often repeated after tweaking limits. --no-clobber
    keeps earlier results instead of overwriting them.

    HOW: Start from --output, --output-dir/{stem}.srt, or {input}.srt. With
    no_clobber, insert a counter before the extension until the name is free.

    RULES:
    - Counter starts at 2 (talk-2.srt, talk-3.srt, ...)
    """
    if output:
        base_path = Path(output)
    elif output_dir:
        base_path = Path(output_dir) / "{}.srt".format(input_path.stem)
    else:
        base_path = input_path.with_suffix(".srt")

    if not no_clobber or not base_path.exists():
        return base_path

    counter = 2
    while True:
        candidate = base_path.with_name(
            "{}-{}{}".format(base_path.stem, counter, base_path.suffix)
        )
        if not candidate.exists():
            return candidate
        counter += 1


def _convert_one(
    input_path: Path,
    config: Dict[str, Any],
    args: argparse.Namespace,
) -> bool:
    """Convert a single JSON file. Returns False if the input was rejected."""
    try:
        whisper_output = load_whisper_json(input_path, encoding=args.encoding)
    except WhisperInputError as e:
        _error(str(e))
        return False

    blocks = build_blocks(whisper_output, config)
    srt = render_srt(blocks)

    if args.stdout:
        sys.stdout.write(srt)
        return True

    output_path = resolve_output_path(
        input_path, args.output, args.output_dir, args.no_clobber
    )
    _status("Writing subtitles: {}".format(output_path))
    if args.echo:
        sys.stdout.write(srt)
    try:
        output_path.write_text(srt, encoding=args.encoding)
    except (OSError, UnicodeError) as e:
        _error("Could not write {}: {}".format(output_path, e))
        return False
    _status("  {} blocks from {} segments".format(len(blocks), len(whisper_output.segments)))
    return True


def _run(args: argparse.Namespace) -> None:
    """Execute the conversion for every input; exits non-zero on failure."""
    try:
        codecs.lookup(args.encoding)
    except LookupError:
        _error("Unknown encoding: {}".format(args.encoding))
        sys.exit(1)

    overrides = {
        "max_line_chars": args.max_line_chars,
        "min_line_chars": args.min_line_chars,
        "max_line_duration": args.max_line_duration,
        "merge_blocks": False if args.no_merge else None,
    }
    try:
        config = resolve_config(args.preset, overrides)
    except ValueError as e:
        _error(str(e))
        sys.exit(1)

    try:
        inputs = collect_inputs(args.inputs)
    except FileNotFoundError as e:
        _error(str(e))
        sys.exit(1)

    if not inputs:
        _error("No JSON files found in {}".format(", ".join(args.inputs)))
        sys.exit(1)

    if args.output and len(inputs) > 1:
        _error("--output can only be used with a single input file")
        sys.exit(1)

    if args.output_dir and not Path(args.output_dir).is_dir():
        _error("Output directory does not exist: {}".format(args.output_dir))
        sys.exit(1)

    logger.info("Converting %d file(s) with preset %s", len(inputs), args.preset)

    failed = 0
    for input_path in inputs:
        if not _convert_one(input_path, config, args):
            failed += 1

    if len(inputs) > 1:
        _status("Done: {} converted, {} failed".format(len(inputs) - failed, failed))
    if failed:
        sys.exit(1)


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the CLI.

    WHY: Separating parser construction from main() makes the CLI
    testable: tests can inspect the parser without converting anything.
    """
    parser = argparse.ArgumentParser(
        prog="whisper-sort-srt",
        description="Rebuild SRT subtitles from Whisper JSON word timestamps, "
                    "with punctuation- and word-boundary-aware line breaks.",
    )

    parser.add_argument(
        "inputs",
        nargs="+",
        metavar="INPUT",
        help="Whisper JSON file(s), or directories containing *.json files.",
    )

    parser.add_argument(
        "-o", "--output",
        default=None,
        help="Output SRT path (single input only; default: input with .srt suffix).",
    )

    parser.add_argument(
        "--output-dir",
        default=None,
        help="Directory to save SRT files (default: next to each input).",
    )

    parser.add_argument(
        "--stdout",
        action="store_true",
        help="Write SRT content to stdout instead of files.",
    )

    parser.add_argument(
        "--echo",
        action="store_true",
        help="Also print each generated SRT to stdout.",
    )

    parser.add_argument(
        "--no-clobber",
        action="store_true",
        help="Never overwrite an existing SRT; add a numeric suffix instead.",
    )

    parser.add_argument(
        "--preset",
        default=DEFAULT_PRESET,
        choices=sorted(PRESETS.keys()),
        help="Line length/timing preset (default: %(default)s).",
    )

    parser.add_argument(
        "--max-line-chars",
        type=int,
        default=None,
        help="Break a line once it reaches this many characters.",
    )

    parser.add_argument(
        "--min-line-chars",
        type=int,
        default=None,
        help="Only break at punctuation once a line has this many characters.",
    )

    parser.add_argument(
        "--max-line-duration",
        type=float,
        default=None,
        help="Break a line once it runs longer than this many seconds.",
    )

    parser.add_argument(
        "--no-merge",
        action="store_true",
        help="Do not merge short subtitle blocks into their neighbours.",
    )

    parser.add_argument(
        "--encoding",
        default=DEFAULT_ENCODING,
        help="Encoding for reading JSON and writing SRT (default: %(default)s).",
    )

    parser.add_argument(
        "-v", "--verbose",
        action="count",
        default=0,
        help="Increase log output (-v info, -vv debug).",
    )

    parser.add_argument(
        "-q", "--quiet",
        action="store_true",
        help="Only log errors.",
    )

    parser.add_argument(
        "--version",
        action="version",
        version="%(prog)s {}".format(__version__),
    )

    return parser


def _check_limits(parser: argparse.ArgumentParser, args: argparse.Namespace) -> None:
    """Reject line limits that would put every word on its own line."""
    if args.max_line_chars is not None and args.max_line_chars < 1:
        parser.error("--max-line-chars must be at least 1")
    if args.min_line_chars is not None and args.min_line_chars < 1:
        parser.error("--min-line-chars must be at least 1")
    if args.max_line_duration is not None and args.max_line_duration <= 0:
        parser.error("--max-line-duration must be greater than 0")


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the CLI.

    RULES:
    - argv=None means use sys.argv (normal CLI invocation)
    - Explicit argv is for testing
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    _check_limits(parser, args)
    _configure_logging(args.verbose, args.quiet)

    try:
        _run(args)
    except KeyboardInterrupt:
        _status("\nCancelled by user.")
        sys.exit(130)
    except Exception as e:
        logger.debug("Unhandled error", exc_info=True)
        _error(str(e))
        sys.exit(1)


if __name__ == "__main__":
    main()
