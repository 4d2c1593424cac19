"""Word-chain storage and sentence building backed by SQLite."""

from __future__ import annotations

import re
import sqlite3
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable

BLOCKLIST = ("!speak", "!talklike")

_SPACE_RE = re.compile(r"\s+")

_RANDOM_START = """
    SELECT werd, NULLIF(nextwerd, ''), NULLIF(prevwerd, '') FROM werdz
    WHERE _ROWID_ >= (abs(random()) % (SELECT max(_ROWID_) FROM werdz))
    AND (prevwerd != '' OR nextwerd != '')
    LIMIT 1;
"""

_RANDOM_START_LIKE = """
    SELECT werd, NULLIF(nextwerd, ''), NULLIF(prevwerd, '') FROM werdz
    WHERE (prevwerd != '' OR nextwerd != '')
    AND normalizedsaidby = lower(:saidby)
    AND random() % 143 = 0
    LIMIT 1;
"""

_SEARCH_START = """
    SELECT werd, NULLIF(nextwerd, ''), NULLIF(prevwerd, '') FROM werdz
    WHERE rowid IN (
        SELECT rowid FROM werdz
        WHERE werd = :werd AND (prevwerd != '' OR nextwerd != '')
        ORDER BY RANDOM()
        LIMIT 1
    );
"""

_SEARCH_START_LIKE = """
    SELECT werd, NULLIF(nextwerd, ''), NULLIF(prevwerd, '') FROM werdz
    WHERE rowid IN (
        SELECT rowid FROM werdz
        WHERE werd = :werd AND (prevwerd != '' OR nextwerd != '')
            AND normalizedsaidby = lower(:saidby)
        ORDER BY RANDOM()
        LIMIT 1
    );
"""

_SEARCH_NEXT = """
    SELECT werd, NULLIF(nextwerd, ''), NULLIF(prevwerd, '') FROM werdz
    WHERE rowid IN (
        SELECT rowid FROM werdz
        WHERE werd = :werd AND prevwerd = :prevwerd
        ORDER BY RANDOM()
        LIMIT 1
    )
    LIMIT 1;
"""

_SEARCH_NEXT_LIKE = """
    SELECT werd, NULLIF(nextwerd, ''), NULLIF(prevwerd, '') FROM werdz
    WHERE rowid IN (
        SELECT rowid FROM werdz
        WHERE werd = :werd AND prevwerd = :prevwerd
        AND normalizedsaidby = lower(:saidby)
        ORDER BY RANDOM()
        LIMIT 1
    )
    LIMIT 1;
"""

_SEARCH_PREV = """
    SELECT werd, NULLIF(nextwerd, ''), NULLIF(prevwerd, '') FROM werdz
    WHERE rowid IN (
        SELECT rowid FROM werdz
        WHERE werd = :werd AND nextwerd = :nextwerd
        ORDER BY RANDOM()
        LIMIT 1
    )
    LIMIT 1;
"""

_SEARCH_PREV_LIKE = """
    SELECT werd, NULLIF(nextwerd, ''), NULLIF(prevwerd, '') FROM werdz
    WHERE rowid IN (
        SELECT rowid FROM werdz
        WHERE werd = :werd AND nextwerd = :nextwerd
        AND normalizedsaidby = lower(:saidby)
        ORDER BY RANDOM()
        LIMIT 1
    )
    LIMIT 1;
"""

_SAVE_WORD = """
    INSERT INTO werdz (werd, nextwerd, prevwerd, saidby, normalizedsaidby)
    VALUES (:werd, :nextwerd, :prevwerd, :saidby, lower(:saidby))
"""

_CREATE_TABLE = """
    CREATE TABLE IF NOT EXISTS werdz (
        saidby TEXT NOT NULL,
        normalizedsaidby TEXT NOT NULL,
        werd TEXT NOT NULL,
        prevwerd TEXT NOT NULL,
        nextwerd TEXT NOT NULL,
        UNIQUE (saidby, normalizedsaidby, werd, prevwerd, nextwerd)
    );
"""

_CREATE_INDEXES = (
    "CREATE INDEX nextprev on werdz (prevwerd, nextwerd);",
    "CREATE INDEX werdsearch ON werdz(werd, prevwerd, nextwerd);",
    "CREATE INDEX saidby ON werdz(saidby, normalizedsaidby);",
    "CREATE INDEX werdsaidby on werdz(werd, normalizedsaidby);",
    "CREATE INDEX werdprev on werdz(werd, prevwerd, normalizedsaidby);",
    "CREATE INDEX werdnext on werdz(werd, nextwerd, normalizedsaidby);",
)


class SporkerError(Exception):
    """Raised when the word database cannot be opened."""


def _debug_opt(value: str | None) -> str:
    return "None" if value is None else f"Some({value!r})".replace("'", '"')


@dataclass(frozen=True)
class Foon:
    """One word record together with its neighbouring words."""

    werd: str
    next: str | None = None
    prev: str | None = None

    def next_word(self, spork: Spork) -> Foon | None:
        return _query_one(spork.db, _SEARCH_NEXT, {"werd": self.next, "prevwerd": self.werd})

    def next_word_like(self, spork: Spork, saidby: str) -> Foon | None:
        params = {"werd": self.next, "prevwerd": self.werd, "saidby": saidby}
        return _query_one(spork.db, _SEARCH_NEXT_LIKE, params)

    def prev_word(self, spork: Spork) -> Foon | None:
        return _query_one(spork.db, _SEARCH_PREV, {"werd": self.prev, "nextwerd": self.werd})

    def prev_word_like(self, spork: Spork, saidby: str) -> Foon | None:
        params = {"werd": self.prev, "nextwerd": self.werd, "saidby": saidby}
        return _query_one(spork.db, _SEARCH_PREV_LIKE, params)

    def __str__(self) -> str:
        return f"prev: {_debug_opt(self.prev)} word: {self.werd} next: {_debug_opt(self.next)}"


def _query_one(db: sqlite3.Connection, sql: str, params: dict[str, Any]) -> Foon | None:
    row = db.execute(sql, params).fetchone()
    if row is None:
        return None
    werd, nxt, prev = row
    return Foon(werd=werd, next=nxt, prev=prev)


class Spork:
    """Holds a database handle and picks starting words from it."""

    def __init__(self, db: sqlite3.Connection) -> None:
        self.db = db

    def start(self) -> Foon | None:
        return _query_one(self.db, _RANDOM_START, {})

    def start_like(self, saidby: str) -> Foon | None:
        return _query_one(self.db, _RANDOM_START_LIKE, {"saidby": saidby})

    def start_with_word(self, word: str) -> Foon | None:
        return _query_one(self.db, _SEARCH_START, {"werd": str(word)})

    def start_with_word_like(self, word: str, saidby: str) -> Foon | None:
        return _query_one(self.db, _SEARCH_START_LIKE, {"werd": str(word), "saidby": saidby})

    def log_message(self, who: str, what: str) -> int:
        """Store a chat line as word records; return how many were new."""
        with self.db:
            return log_words(self.db, who, _SPACE_RE.split(what))

    def __repr__(self) -> str:
        return f"Spork(db={self.db!r})"


def log_words(db: sqlite3.Connection, saidby: str, words: Iterable[str]) -> int:
    """Insert each word with its neighbours; return how many records were new.

    Lines of fewer than two words, or starting with a blocked command, are ignored.
    """
    words = list(words)
    if len(words) < 2 or words[0] in BLOCKLIST:
        return 0
    inserted = 0
    prevs = [""] + words[:-1]
    nexts = words[1:] + [""]
    for prev, word, nxt in zip(prevs, words, nexts):
        try:
            db.execute(
                _SAVE_WORD,
                {"werd": word, "nextwerd": nxt, "prevwerd": prev, "saidby": saidby},
            )
        except sqlite3.IntegrityError:
            continue
        inserted += 1
    return inserted


def opendb(file: str | Path) -> sqlite3.Connection:
    """Open a database file in autocommit mode."""
    return sqlite3.connect(file, isolation_level=None)


def getdb(directory: str | Path | None = None) -> sqlite3.Connection:
    """Open ``data/werdz.sqlite`` under ``directory`` (default: the working directory)."""
    base = Path.cwd() if directory is None else Path(directory)
    path = base / "data" / "werdz.sqlite"
    try:
        return opendb(path)
    except sqlite3.Error as exc:
        raise SporkerError("Database error") from exc


def create_table(db: sqlite3.Connection) -> None:
    db.execute(_CREATE_TABLE)


def create_indexes(db: sqlite3.Connection) -> None:
    for statement in _CREATE_INDEXES:
        db.execute(statement)


def _build(word: Foon, prev_of, next_of) -> list[str]:
    before: list[str] = []
    current = prev_of(word)
    while current is not None:
        before.append(current.werd)
        current = prev_of(current)
    after: list[str] = []
    current = next_of(word)
    while current is not None:
        after.append(current.werd)
        current = next_of(current)
    return [*reversed(before), word.werd, *after]


def build_words(word: Foon, spork: Spork) -> list[str]:
    """Walk backwards and forwards from ``word`` to build a sentence."""
    return _build(word, lambda f: f.prev_word(spork), lambda f: f.next_word(spork))


def build_words_like(word: Foon, spork: Spork, saidby: str) -> list[str]:
    """Like :func:`build_words`, using only words said by ``saidby``."""
    return _build(
        word,
        lambda f: f.prev_word_like(spork, saidby),
        lambda f: f.next_word_like(spork, saidby),
    )