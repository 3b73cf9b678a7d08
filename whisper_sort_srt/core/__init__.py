"""Core IR, loading, and subtitle construction modules.

WHY: The core package holds the format-agnostic heart of the converter:
the IR dataclasses, the JSON loader, and the split/merge algorithms. The
SRT formatter and the CLI are built on top of it.

HOW: ir.py defines the data structures, loader.py builds them from Whisper
JSON, tokenizer.py and aligner.py find word boundaries, splitter.py and
merger.py turn words into subtitle lines.

RULES:
- IR dataclasses are the contract: change with care
- No file or console I/O outside loader.py
"""
