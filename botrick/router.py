"""Dispatching incoming chat messages to handlers by regular expression."""

from __future__ import annotations

import logging
import re
from abc import ABC, abstractmethod
from typing import Callable, Iterable

from botrick.message import CommandMessage, IrcMessage

log = logging.getLogger(__name__)


class Actor(ABC):
    """Something that handles a chat command."""

    @abstractmethod
    def process(self, message: CommandMessage) -> None:
        """Handle one message."""

    def __repr__(self) -> str:
        return "Actor"


class Sender:
    """Writes PRIVMSG lines through a line-writing callable."""

    def __init__(self, write: Callable[[str], object]) -> None:
        self._write = write

    def send_privmsg(self, target: str, text: str) -> None:
        """Send ``text`` to ``target``, one PRIVMSG per line."""
        for line in text.splitlines():
            self._write(f"PRIVMSG {target} :{line}")


class IrcRouter:
    """Routes messages to the handler whose regex matches first, else the default."""

    def __init__(self, default_handler: Actor) -> None:
        self.default_handler = default_handler
        self.handlers: dict[str, Actor] = {}
        self._regex_sources: list[str] = []
        self._regex_prefixes: list[str | None] = []
        self._regex_handlers: list[Actor] = []
        self._regexes: list[re.Pattern[str]] = []

    def process(self, message: IrcMessage | CommandMessage) -> Actor:
        """Hand the message to its handler and return that handler."""
        log.debug("Received: %s", message)
        if isinstance(message, IrcMessage):
            message = CommandMessage.from_irc(message)
        handler = next(
            (
                self._regex_handlers[i]
                for i, pattern in enumerate(self._regexes)
                if pattern.search(message.full_text)
            ),
            self.default_handler,
        )
        handler.process(message)
        return handler

    def register(self, command: str, handler: Actor) -> None:
        self.handlers[str(command)] = handler

    def register_regex(
        self, regexes: Iterable[str], handler: Actor, prefix: str | None = None
    ) -> None:
        """Queue regexes for ``handler``; they take effect on :meth:`refresh_regexes`."""
        for regex in regexes:
            self._regex_sources.append(str(regex))
            self._regex_prefixes.append(None)
            self._regex_handlers.append(handler)

    def register_prefixed(self, prefix: str, commands: Iterable[str], handler: Actor) -> None:
        self.register_regex(self.create_prefixed_regex(prefix, commands), handler, prefix)

    def create_prefixed_regex(self, prefix: str, regexes: Iterable[str]) -> list[str]:
        return [rf"^{prefix}{regex}\b" for regex in regexes]

    def refresh_regexes(self) -> None:
        """Compile the registered regexes; any invalid one empties the set."""
        try:
            self._regexes = [re.compile(source) for source in self._regex_sources]
        except re.error:
            log.debug("Invalid regex among %r", self._regex_sources)
            self._regexes = []