"""Command-line sentence generators over the word database."""

from __future__ import annotations

import sys
from typing import Sequence

from botrick.sporker import Spork, build_words, build_words_like, getdb


def main(argv: Sequence[str] | None = None) -> int:
    """Print a sentence, starting from the given word or a random one."""
    args = list(sys.argv[1:] if argv is None else argv)
    spork = Spork(getdb())
    start = spork.start_with_word(args[0]) if args else spork.start()
    if start is None:
        print("Couldn't do it could I")
    else:
        print(" ".join(build_words(start, spork)))
    return 0


def sporklike_main(argv: Sequence[str] | None = None) -> int:
    """Print a sentence made only of words said by the given nick."""
    args = list(sys.argv[1:] if argv is None else argv)
    spork = Spork(getdb())
    if not args:
        print("Talking about nobody is it")
        return 0
    saidby = args[0]
    if len(args) == 1:
        start = spork.start_like(saidby)
    else:
        start = spork.start_with_word_like(args[1], saidby)
    if start is None:
        print("Talking about nobody and nothing is it")
    else:
        print(" ".join(build_words_like(start, spork, saidby)))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())