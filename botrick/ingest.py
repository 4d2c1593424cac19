"""Bulk import of irssi-style chat logs into the word database."""

from __future__ import annotations

import argparse
import re
import sqlite3
from itertools import islice
from pathlib import Path
from typing import Iterable, Iterator, Sequence

from botrick.sporker import create_indexes, create_table, log_words, opendb

TIMESTAMP_WIDTH = 19
DEFAULT_CHUNK_SIZE = 10_000

_ASCII_WHITESPACE = re.compile(r"[ \t\n\x0c\r]+")


def parse_log_line(line: str) -> tuple[str, list[str]] | None:
    """Split a log line into the speaker's nick and the words spoken.

    Returns None for lines that are not chat messages or actions.
    """
    body = line[TIMESTAMP_WIDTH:]
    if len(body) < 5:
        return None

    nick_start = nick_end = words_offset = 0
    if body[0] == "<":
        nick_start, words_offset = 2, 2
        nick_end = max(body.find(">"), 0)
    if body[1] == "*":
        nick_start, words_offset = 3, 1
        space = body.find(" ", nick_start)
        nick_end = space if space >= 0 else nick_start

    if nick_end == 0:
        return None

    nick = body[nick_start:nick_end]
    words = [w for w in _ASCII_WHITESPACE.split(body[nick_end + words_offset:]) if w]
    if not nick or not words:
        return None
    return nick, words


def _ingest_chunk(db: sqlite3.Connection, chunk: list[str]) -> None:
    if not db.in_transaction:
        db.execute("BEGIN")
    try:
        for line in chunk:
            parsed = parse_log_line(line.rstrip("\r\n"))
            if parsed is not None:
                nick, words = parsed
                log_words(db, nick, words)
    except BaseException:
        db.rollback()
        raise
    db.commit()


def ingest_lines(
    db: sqlite3.Connection,
    lines: Iterable[str],
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> Iterator[int]:
    """Store log lines in chunks, one transaction each.

    Yields the running count of lines read after each chunk is committed.
    """
    if chunk_size < 1:
        raise ValueError("chunk_size must be at least 1")
    total = 0
    source = iter(lines)
    while chunk := list(islice(source, chunk_size)):
        _ingest_chunk(db, chunk)
        total += len(chunk)
        yield total


def main(argv: Sequence[str] | None = None) -> int:
    """Import a log file into a word database and build its indexes."""
    parser = argparse.ArgumentParser(
        prog="sporker-ingest", description="Import a chat log into the word database."
    )
    parser.add_argument("-f", "--file", type=Path, required=True, help="log file to read")
    parser.add_argument("--db", default="werdz.sqlite", help="database file to write")
    parser.add_argument(
        "--chunk-size", type=int, default=DEFAULT_CHUNK_SIZE, help="lines per transaction"
    )
    args = parser.parse_args(argv)

    path = args.file.resolve(strict=True)
    db = opendb(args.db)
    try:
        create_table(db)
        with path.open(encoding="utf-8", errors="replace") as fh:
            for total in ingest_lines(db, fh, args.chunk_size):
                print(f"Processed {total} lines")
        print("Creating indexes")
        create_indexes(db)
        print("Done")
    finally:
        db.close()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())