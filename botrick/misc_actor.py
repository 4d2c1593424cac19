"""Small fun commands: yes/no oracle and fake registry paths."""

from __future__ import annotations

import logging
import random

from botrick.color import Color, colorize
from botrick.message import CommandMessage
from botrick.router import Actor, Sender

log = logging.getLogger(__name__)

DWORD_ROOTS = ("HKLM", "HKIM", "HKFU")
DWORDS = (
    "MICRODINKY",
    "7",
    "yes",
    "no",
    "null",
    "SHUT",
    "gregin",
    "txp",
    "tap",
    "txptap",
    "ye",
    "TRUE",
    "false",
    "FALSé",
    "trve",
    "kvlt",
    "Y",
    "N",
    "DWORD",
)


def isit(rng: random.Random) -> str:
    """Answer yes or no at random, in red."""
    answer = "It is" if rng.getrandbits(1) else "Just isn't"
    return colorize(Color.RED, None, answer)


def dword(rng: random.Random) -> str:
    """Build a random backslash-separated registry-like path."""
    count = rng.randrange(1, 25)
    parts = [rng.choice(DWORD_ROOTS)]
    parts.extend(rng.choice(DWORDS) for _ in range(1, count))
    return "\\".join(parts)


class MiscActor(Actor):
    """Handles the ``isit`` and ``dword`` commands."""

    def __init__(self, sender: Sender, rng: random.Random | None = None) -> None:
        self.sender = sender
        self.rng = rng or random.Random()

    def process(self, message: CommandMessage) -> None:
        log.debug("Misc actor received: %r", message)
        name = message.command[1:]
        if name == "isit":
            self.sender.send_privmsg(message.respond_to, isit(self.rng))
        elif name == "dword":
            self.sender.send_privmsg(message.respond_to, dword(self.rng))


class TestActor(Actor):
    """Logs whatever it is given."""

    __test__ = False

    def process(self, message: CommandMessage) -> None:
        log.debug("Test is handling %r", message)