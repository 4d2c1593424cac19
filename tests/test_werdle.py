import random
import string

import pytest

from botrick.werdle import (
    MAX_TRIES,
    Game,
    GuessCharState,
    GuessResult,
    WerdleError,
    load_words,
)


def test_correct_guess_finishes_game():
    game = Game("crane")
    result = game.guess("crane")
    assert all(state is GuessCharState.RIGHT_CHAR for _, state in result.result)
    assert [c for c, _ in result.result] == list("CRANE")
    assert game.is_correct()
    assert game.is_finished()


def test_guess_is_uppercased():
    game = Game("crane")
    game.guess("CrAnE")
    assert game.is_correct()
    assert game.werd == "CRANE"


@pytest.mark.parametrize("guess", ["abc", "abcdef", ""])
def test_wrong_length_raises(guess):
    game = Game("crane")
    with pytest.raises(WerdleError):
        game.guess(guess)
    assert game.guesses_left() == MAX_TRIES


def test_states_are_consistent_with_word():
    game = Game("crane")
    result = game.guess("nacre")
    for i, (c, state) in enumerate(result.result):
        if state is GuessCharState.RIGHT_CHAR:
            assert game.werd[i] == c
        elif state is GuessCharState.WRONG_PLACE:
            assert c in game.werd and game.werd[i] != c
        else:
            assert c not in game.werd


def test_absent_letters_are_wrong_char():
    game = Game("crane")
    result = game.guess("xxxxx")
    assert {state for _, state in result.result} == {GuessCharState.WRONG_CHAR}


def test_guesses_left_and_no_more_tries():
    game = Game("crane")
    assert game.guesses_left() == MAX_TRIES
    for n in range(1, MAX_TRIES + 1):
        game.guess("xxxxx")
        assert game.guesses_left() == MAX_TRIES - n
    assert game.no_more_tries()
    assert game.is_finished()
    assert not game.is_correct()


def test_letters_partition_alphabet():
    game = Game("crane")
    game.guess("hello")
    guessed = set(game.guessed_letters().split())
    unguessed = set(game.unguessed_letters().split())
    assert guessed == set("HELO")
    assert guessed | unguessed == set(string.ascii_uppercase)
    assert not guessed & unguessed
    assert game.guessed_letters().split() == sorted(guessed)


def test_fresh_game_unguessed_is_alphabet():
    game = Game("crane")
    assert game.unguessed_letters() == " ".join(string.ascii_uppercase)
    assert game.guessed_letters() == ""
    assert game.last_guess() is None


def test_last_guess_matches_result():
    game = Game("crane")
    result = game.guess("trace")
    assert game.last_guess() == result
    result.add("Z", GuessCharState.WRONG_CHAR)
    assert game.last_guess() != result


def test_guess_result_add_chains():
    res = GuessResult()
    assert res.add("A", GuessCharState.RIGHT_CHAR) is res
    assert res.result == [("A", GuessCharState.RIGHT_CHAR)]


def test_random_picks_from_words():
    words = ["abcde", "fghij"]
    game = Game.random(words, random.Random(3))
    assert game.werd in {"ABCDE", "FGHIJ"}


def test_random_from_empty_list():
    assert Game.random([]).werd == ""


def test_load_words(tmp_path):
    path = tmp_path / "words.txt"
    path.write_text("apple\ncrane\n", encoding="utf-8")
    assert load_words(path) == ["apple", "crane"]