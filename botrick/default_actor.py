"""Fallback handling: link titles, word logging and the bots roll call."""

from __future__ import annotations

import asyncio
import logging
import re
from html.parser import HTMLParser
from typing import Coroutine

import httpx

from botrick.color import Color, colorize, strip_formatting
from botrick.config import PKG_VERSION, Config
from botrick.message import CommandMessage
from botrick.router import Actor, Sender
from botrick.sporker import Spork

log = logging.getLogger(__name__)

BOTS_COMMAND = ".bots"
_TIMEOUT = httpx.Timeout(10.0)

_URL_RE = re.compile(r"(?<![A-Za-z0-9])[A-Za-z][A-Za-z0-9+.\-]*://[^\s<>\"]+")
_TRAILING = ".,:;!?'"
_CLOSERS = {")": "(", "]": "[", "}": "{"}


def _trim_url(url: str) -> str:
    while url:
        last = url[-1]
        if last in _TRAILING:
            url = url[:-1]
        elif last in _CLOSERS and url.count(last) > url.count(_CLOSERS[last]):
            url = url[:-1]
        else:
            break
    return url


def get_urls(message: str) -> list[str]:
    """Find the URLs (with a scheme) in a chat message, in order."""
    urls = []
    for match in _URL_RE.finditer(message):
        url = _trim_url(match.group(0))
        if not url.endswith("://"):
            urls.append(url)
    return urls


class _TitleParser(HTMLParser):
    def __init__(self) -> None:
        super().__init__()
        self.found = False
        self._inside = False
        self._parts: list[str] = []

    def handle_starttag(self, tag, attrs):
        if tag == "title" and not self.found:
            self.found = True
            self._inside = True

    def handle_endtag(self, tag):
        if tag == "title":
            self._inside = False

    def handle_data(self, data):
        if self._inside:
            self._parts.append(data)

    @property
    def title(self) -> str | None:
        return "".join(self._parts) if self.found else None


async def get_url_title(url: str) -> str | None:
    """Fetch ``url`` and return its HTML title, or None if there is none."""
    if not url:
        return None
    try:
        async with httpx.AsyncClient(follow_redirects=True, timeout=_TIMEOUT) as client:
            response = await client.get(url)
    except (httpx.HTTPError, httpx.InvalidURL, ValueError):
        return None
    content_type = response.headers.get("content-type")
    if content_type is None or not content_type.startswith("text/html"):
        return None
    parser = _TitleParser()
    parser.feed(response.text)
    parser.close()
    return parser.title


async def scan_urls(message: CommandMessage, config: Config, sender: Sender) -> None:
    """Announce the title of the first link in a message, if enabled."""
    stripped = strip_formatting(message.full_text)
    if any(reject in stripped for reject in config.inspect_rejects):
        return
    urls = get_urls(message.full_text)
    if not config.inspect_urls or not urls:
        return
    title = await get_url_title(urls[0])
    if title is None:
        return
    sender.send_privmsg(message.respond_to, f"{colorize(Color.GREEN, None, 'LINK >>')} {title}")


class LogActor:
    """Feeds chat lines into the word database."""

    def __init__(self, spork: Spork) -> None:
        self.spork = spork

    def log(self, message: CommandMessage) -> None:
        log.debug("Logger got %r", message)
        text = message.full_text
        if not text.startswith("\x01") or text.startswith("\x01ACTION"):
            self.spork.log_message(message.sent_by, text)


class DefaultActor(Actor):
    """Handles messages no command claimed, and the bots roll call."""

    def __init__(self, sender: Sender, config: Config, logger: LogActor) -> None:
        self.sender = sender
        self.config = config
        self.logger = logger
        self.pending: set[asyncio.Task] = set()

    def process(self, message: CommandMessage) -> None:
        log.debug("Default actor received: %r", message)
        if message.command == BOTS_COMMAND:
            self.sender.send_privmsg(
                message.respond_to,
                f"Reporting in! [Python 🐍] just %spork or %sporklike, yo. v{PKG_VERSION}",
            )
            return
        self._spawn(scan_urls(message, self.config, self.sender))
        self.logger.log(message)

    def _spawn(self, coro: Coroutine) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            asyncio.run(coro)
            return
        task = loop.create_task(coro)
        self.pending.add(task)
        task.add_done_callback(self.pending.discard)