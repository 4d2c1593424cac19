"""The spork and sporklike sentence-generating commands."""

from __future__ import annotations

import logging
from dataclasses import replace

from botrick.message import CommandMessage
from botrick.router import Actor, Sender
from botrick.sporker import Spork, build_words, build_words_like

log = logging.getLogger(__name__)

FAILED = "Couldn't do it could I"
NOBODY = "Talking about nobody is it"


class SporkActor(Actor):
    """Builds sentences from the word database on request."""

    def __init__(self, sender: Sender, spork: Spork) -> None:
        self.sender = sender
        self.spork = spork

    def process(self, message: CommandMessage) -> None:
        log.debug("Spork actor received: %r", message)
        if message.command == "7":
            self.handle_spork(replace(message, params="7"))
            return
        name = message.command[1:]
        if name == "spork":
            self.handle_spork(message)
        elif name == "sporklike":
            self.handle_sporklike(message)

    def handle_spork(self, message: CommandMessage) -> None:
        """Reply with a sentence, starting from the first parameter if given."""
        words = message.params.split()
        start = self.spork.start_with_word(words[0]) if words else self.spork.start()
        if start is None:
            output = FAILED
        else:
            output = " ".join([f"{message.sent_by}:", *build_words(start, self.spork)])
        self.sender.send_privmsg(message.respond_to, output)

    def handle_sporklike(self, message: CommandMessage) -> None:
        """Reply with a sentence made of words said by the nick in the parameters."""
        words = message.params.split()
        if not words:
            self.sender.send_privmsg(message.respond_to, NOBODY)
            return
        saidby = words[0]
        if len(words) == 1:
            start = self.spork.start_like(saidby)
        else:
            start = self.spork.start_with_word_like(words[1], saidby)
        if start is None:
            output = FAILED
        else:
            output = " ".join(
                [f"{message.sent_by}:", *build_words_like(start, self.spork, saidby)]
            )
        self.sender.send_privmsg(message.respond_to, output)