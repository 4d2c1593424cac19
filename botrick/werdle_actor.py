"""Chat front end for the word guessing game."""

from __future__ import annotations

import logging
from typing import Callable

from botrick.color import Color, colorize
from botrick.message import CommandMessage
from botrick.router import Actor, Sender
from botrick.werdle import Game, GuessCharState, GuessResult, WerdleError

log = logging.getLogger(__name__)

EMPTY_GUESS = "_____"


def color_result(result: GuessResult) -> str:
    """Render a guess with right letters green, misplaced ones yellow, and misses as ``_``."""
    pieces = []
    for char, state in result.result:
        if state is GuessCharState.WRONG_CHAR:
            pieces.append("_")
        elif state is GuessCharState.WRONG_PLACE:
            pieces.append(colorize(Color.YELLOW, None, char))
        else:
            pieces.append(colorize(Color.GREEN, None, char))
    return "".join(pieces)


class WerdleActor(Actor):
    """Runs one shared game, starting a fresh one whenever a game ends."""

    def __init__(self, sender: Sender, new_game: Callable[[], Game]) -> None:
        self.sender = sender
        self.new_game = new_game
        self.game = new_game()

    def process(self, message: CommandMessage) -> None:
        log.debug("Werdle actor received: %r", message)
        if message.params.strip():
            self._guess(message)
        else:
            self._state(message)

    def _guess(self, message: CommandMessage) -> None:
        target = message.respond_to
        try:
            result = self.game.guess(message.params)
        except WerdleError:
            self.sender.send_privmsg(target, "Guess correctly pls")
        else:
            if self.game.is_correct():
                self.sender.send_privmsg(
                    target, f"You did it. It was {self.game.werd}. Good job Team."
                )
                self.game = self.new_game()
            elif self.game.is_finished():
                self.sender.send_privmsg(
                    target,
                    "Sorry, nobody got it. Better luck next time or something. "
                    f"It was {self.game.werd} btw.",
                )
            else:
                self.sender.send_privmsg(
                    target,
                    f"NO, try again. {color_result(result)}, remaining letters: "
                    f"{self.game.unguessed_letters()}. {self.game.guesses_left()} tries left.",
                )
        if self.game.is_finished():
            self.game = self.new_game()

    def _state(self, message: CommandMessage) -> None:
        last = self.game.last_guess()
        guess = EMPTY_GUESS if last is None else color_result(last)
        self.sender.send_privmsg(
            message.respond_to,
            f"{guess}, remaining letters: {self.game.unguessed_letters()}. "
            f"{self.game.guesses_left()} tries left.",
        )