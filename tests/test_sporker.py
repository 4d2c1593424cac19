import sqlite3

import pytest

from botrick.sporker import (
    Foon,
    Spork,
    SporkerError,
    build_words,
    build_words_like,
    create_indexes,
    create_table,
    getdb,
    log_words,
    opendb,
)


@pytest.fixture
def spork():
    db = opendb(":memory:")
    create_table(db)
    return Spork(db)


def _rows(spork):
    return sorted(
        spork.db.execute("SELECT werd, prevwerd, nextwerd, saidby, normalizedsaidby FROM werdz")
    )


def test_log_message_stores_neighbours(spork):
    assert spork.log_message("Alice", "hello there world") == 3
    assert _rows(spork) == sorted(
        [
            ("hello", "", "there", "Alice", "alice"),
            ("there", "hello", "world", "Alice", "alice"),
            ("world", "there", "", "Alice", "alice"),
        ]
    )


def test_single_word_is_ignored(spork):
    assert spork.log_message("Alice", "hello") == 0
    assert _rows(spork) == []


def test_blocklisted_first_word_is_ignored(spork):
    assert spork.log_message("Alice", "!speak to me") == 0
    assert _rows(spork) == []


def test_duplicates_are_ignored(spork):
    spork.log_message("Alice", "hello there world")
    assert spork.log_message("Alice", "hello there world") == 0
    assert len(_rows(spork)) == 3


def test_log_words_directly(spork):
    assert log_words(spork.db, "Bob", ["a", "b"]) == 2
    assert len(_rows(spork)) == 2


def test_build_words_reconstructs_sentence(spork):
    spork.log_message("Alice", "hello there world")
    start = spork.start_with_word("there")
    assert start == Foon(werd="there", next="world", prev="hello")
    assert build_words(start, spork) == ["hello", "there", "world"]


def test_start_on_empty_table(spork):
    assert spork.start() is None


def test_start_picks_a_logged_word(spork):
    spork.log_message("Alice", "hello there world")
    found = spork.start()
    assert found.werd in {"hello", "there", "world"}


def test_start_with_unknown_word(spork):
    spork.log_message("Alice", "hello there world")
    assert spork.start_with_word("nothing") is None


def test_like_variants_respect_speaker(spork):
    spork.log_message("Alice", "hello there world")
    spork.log_message("Bob", "hello there friend")
    start = spork.start_with_word_like("hello", "ALICE")
    assert start.werd == "hello"
    assert build_words_like(start, spork, "alice") == ["hello", "there", "world"]
    assert spork.start_with_word_like("hello", "carol") is None


def test_start_like_only_returns_speaker_words(spork):
    for i in range(100):
        spork.log_message("Bob", f"bob{i} says{i} things{i}")
    spork.log_message("Alice", "alice only")
    results = [spork.start_like("bob") for _ in range(200)]
    found = [r for r in results if r is not None]
    assert found
    assert all(r.werd.startswith(("bob", "says", "things")) for r in found)
    assert spork.start_like("nobody") is None


def test_foon_display():
    assert str(Foon(werd="b", next=None, prev="a")) == 'prev: Some("a") word: b next: None'


def test_create_indexes_twice_fails(spork):
    create_indexes(spork.db)
    with pytest.raises(sqlite3.OperationalError):
        create_indexes(spork.db)


def test_getdb_creates_file(tmp_path):
    (tmp_path / "data").mkdir()
    db = getdb(tmp_path)
    create_table(db)
    db.close()
    assert (tmp_path / "data" / "werdz.sqlite").exists()


def test_getdb_missing_directory(tmp_path):
    with pytest.raises(SporkerError):
        getdb(tmp_path / "missing")


def test_persistence_across_connections(tmp_path):
    path = tmp_path / "werdz.sqlite"
    db = opendb(path)
    create_table(db)
    Spork(db).log_message("Alice", "one two")
    db.close()
    reopened = Spork(opendb(path))
    assert reopened.start_with_word("one") == Foon(werd="one", next="two", prev=None)