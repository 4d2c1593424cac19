"""The bot's IRC connection, command wiring and command-line entry point."""

from __future__ import annotations

import argparse
import asyncio
import logging
import os
import ssl
import tomllib
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any, AsyncIterator, Sequence

from botrick.config import VERSION_STR, Config, load_config
from botrick.default_actor import DefaultActor, LogActor
from botrick.message import IrcMessage
from botrick.misc_actor import MiscActor
from botrick.router import IrcRouter
from botrick.spork_actor import SporkActor
from botrick.sporker import Spork, create_table, getdb
from botrick.werdle import Game, load_words
from botrick.werdle_actor import WerdleActor

log = logging.getLogger(__name__)

BOT_CONFIG_FILE = "botrick.toml"
IRC_CONFIG_FILE = "irc.toml"
WORDS_FILE = Path("data") / "werds.txt"

_END_OF_MOTD = ("376", "422")
_NICK_IN_USE = "433"


@dataclass
class IrcConfig:
    """Connection settings for the IRC server."""

    nickname: str
    server: str
    port: int | None = None
    use_tls: bool = True
    channels: list[str] = field(default_factory=list)
    alt_nicks: list[str] = field(default_factory=list)
    username: str | None = None
    realname: str | None = None
    password: str | None = None
    version: str | None = None

    @property
    def effective_port(self) -> int:
        if self.port is not None:
            return self.port
        return 6697 if self.use_tls else 6667

    @property
    def effective_username(self) -> str:
        return self.username or self.nickname

    @property
    def effective_realname(self) -> str:
        return self.realname or self.nickname


def load_irc_config(path: str | Path) -> IrcConfig:
    """Read IRC connection settings from a TOML file; unknown keys are ignored."""
    with Path(path).open("rb") as fh:
        data: dict[str, Any] = tomllib.load(fh)
    for key in ("nickname", "server"):
        if not isinstance(data.get(key), str) or not data[key]:
            raise ValueError(f"missing or invalid field {key!r}")
    known = {f.name for f in fields(IrcConfig)}
    return IrcConfig(**{k: v for k, v in data.items() if k in known})


class IrcClient:
    """A minimal IRC client: registers, answers pings, joins channels."""

    def __init__(self, config: IrcConfig) -> None:
        self.config = config
        self.nickname = config.nickname
        self._alt_nicks = iter(config.alt_nicks)
        self._reader: asyncio.StreamReader | None = None
        self._writer: asyncio.StreamWriter | None = None

    async def connect(self) -> None:
        context = ssl.create_default_context() if self.config.use_tls else None
        self._reader, self._writer = await asyncio.open_connection(
            self.config.server, self.config.effective_port, ssl=context
        )

    def _send_line(self, line: str) -> None:
        if self._writer is None:
            raise RuntimeError("not connected")
        log.debug("-> %s", line)
        self._writer.write(f"{line}\r\n".encode("utf-8"))

    def identify(self) -> None:
        """Send the registration sequence."""
        self._send_line("CAP END")
        if self.config.password:
            self._send_line(f"PASS {self.config.password}")
        self._send_line(f"NICK {self.nickname}")
        self._send_line(
            f"USER {self.config.effective_username} 0 * :{self.config.effective_realname}"
        )

    def send_privmsg(self, target: str, text: str) -> None:
        """Send ``text`` to ``target``, one PRIVMSG per line."""
        for line in text.splitlines():
            self._send_line(f"PRIVMSG {target} :{line}")

    async def messages(self) -> AsyncIterator[IrcMessage]:
        """Yield incoming messages until the server closes the connection."""
        if self._reader is None or self._writer is None:
            raise RuntimeError("not connected")
        try:
            while True:
                await self._writer.drain()
                raw = await self._reader.readline()
                if not raw:
                    break
                line = raw.decode("utf-8", errors="replace").rstrip("\r\n")
                if not line.strip():
                    continue
                log.debug("<- %s", line)
                message = IrcMessage.parse(line)
                self._handle(message)
                await self._writer.drain()
                yield message
        finally:
            self._writer.close()

    def _handle(self, message: IrcMessage) -> None:
        command = message.command.upper()
        if command == "PING":
            self._send_line(f"PONG :{message.params[-1]}" if message.params else "PONG")
        elif command in _END_OF_MOTD:
            for channel in self.config.channels:
                self._send_line(f"JOIN {channel}")
        elif command == _NICK_IN_USE:
            nick = next(self._alt_nicks, None)
            if nick is None:
                raise ConnectionError("all nicknames are in use")
            self.nickname = nick
            self._send_line(f"NICK {nick}")
        elif command == "PRIVMSG" and len(message.params) >= 2:
            if message.params[1] == "\x01VERSION\x01" and self.config.version:
                sender = message.source_nickname()
                if sender:
                    self._send_line(f"NOTICE {sender} :\x01VERSION {self.config.version}\x01")


def build_router(sender, config: Config, spork: Spork, words: Sequence[str]) -> IrcRouter:
    """Create every command handler and register it with a new router."""
    default_handler = DefaultActor(sender, config, LogActor(spork))
    router = IrcRouter(default_handler)

    werdle_handler = WerdleActor(sender, lambda: Game.random(words))
    router.register_prefixed(config.command_prefix, ["wordle", "werdle"], werdle_handler)

    spork_handler = SporkActor(sender, spork)
    router.register_prefixed(config.command_prefix, ["spork", "sporklike"], spork_handler)
    router.register_regex([r"^7$"], spork_handler, None)
    router.register_regex([r"^\.bots\b"], default_handler, None)

    misc_handler = MiscActor(sender)
    router.register_prefixed(config.command_prefix, ["isit", "dword"], misc_handler)
    router.register_prefixed("~", ["isit"], misc_handler)

    router.refresh_regexes()
    return router


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="botrick", description="An IRC bot.")
    parser.add_argument("--version", action="version", version=VERSION_STR)
    parser.add_argument(
        "-d", "--dir", metavar="DIR", default=".", help="Set Botrick's root directory"
    )
    sub = parser.add_subparsers(dest="command")
    sub.add_parser("init", help="Create a default configuration and data files")
    sub.add_parser("run", help="Run the bot")
    return parser.parse_args(argv)


def _is_ctcp(text: str) -> bool:
    return text.startswith("\x01") and not text.startswith("\x01ACTION")


async def run(args: argparse.Namespace) -> None:
    """Change to the bot's directory and run the bot (or only set it up for ``init``)."""
    os.chdir(Path(args.dir).resolve(strict=True))
    bot_config = load_config(BOT_CONFIG_FILE)

    if args.command == "init":
        Path("data").mkdir(exist_ok=True)
        db = getdb()
        try:
            create_table(db)
        finally:
            db.close()
        return

    irc_config = replace(load_irc_config(IRC_CONFIG_FILE), version=VERSION_STR)
    words = load_words(WORDS_FILE)
    db = getdb()
    try:
        client = IrcClient(irc_config)
        await client.connect()
        client.identify()
        router = build_router(client, bot_config, Spork(db), words)
        async for message in client.messages():
            if message.command.upper() != "PRIVMSG" or len(message.params) < 2:
                continue
            if _is_ctcp(message.params[1]):
                continue
            router.process(message)
    finally:
        db.close()


def main(argv: Sequence[str] | None = None) -> int:
    logging.basicConfig(level=os.environ.get("BOTRICK_LOG", "INFO").upper())
    asyncio.run(run(parse_args(argv)))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())