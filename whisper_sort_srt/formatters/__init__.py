"""Output formatting: SRT timestamps and file rendering.

WHY: Kept apart from core so the split/merge logic stays free of any output
syntax.
"""
