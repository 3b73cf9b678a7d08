"""Package entry point for ``python -m whisper_sort_srt``.

WHY: Users run the converter as ``python -m whisper_sort_srt input.json``
as well as through the ``whisper-sort-srt`` console script.

HOW: Delegates to the CLI's main() function.
"""

from whisper_sort_srt.cli import main

if __name__ == "__main__":
    main()
