"""IRC protocol lines and the command view the bot works with."""

from __future__ import annotations

from dataclasses import dataclass, field

_CHANNEL_PREFIXES = ("#", "&", "+", "!")


@dataclass
class IrcMessage:
    """A single IRC protocol message."""

    command: str
    params: list[str] = field(default_factory=list)
    prefix: str | None = None
    tags: str | None = None

    @classmethod
    def parse(cls, line: str) -> IrcMessage:
        """Parse one protocol line (with or without its line ending)."""
        rest = line.rstrip("\r\n")
        tags = None
        prefix = None
        if rest.startswith("@"):
            tags, _, rest = rest[1:].partition(" ")
            rest = rest.lstrip(" ")
        if rest.startswith(":"):
            prefix, _, rest = rest[1:].partition(" ")
            rest = rest.lstrip(" ")
        head, sep, trailing = rest.partition(" :")
        parts = head.split()
        if not parts:
            raise ValueError(f"no command in IRC line: {line!r}")
        params = parts[1:]
        if sep:
            params.append(trailing)
        return cls(command=parts[0], params=params, prefix=prefix, tags=tags)

    def source_nickname(self) -> str | None:
        """Nickname of the sender, or None for server or missing prefixes."""
        if not self.prefix:
            return None
        if "!" in self.prefix or "@" in self.prefix:
            return self.prefix.split("!", 1)[0].split("@", 1)[0]
        if "." in self.prefix:
            return None
        return self.prefix

    def response_target(self) -> str | None:
        """Where a reply should go: the channel, or the sender for private messages."""
        if (
            self.command.upper() == "PRIVMSG"
            and self.params
            and self.params[0].startswith(_CHANNEL_PREFIXES)
        ):
            return self.params[0]
        return self.source_nickname()

    def __str__(self) -> str:
        pieces = []
        if self.tags is not None:
            pieces.append(f"@{self.tags}")
        if self.prefix is not None:
            pieces.append(f":{self.prefix}")
        pieces.append(self.command)
        if self.params:
            *middle, last = self.params
            pieces.extend(middle)
            if not last or " " in last or last.startswith(":"):
                last = f":{last}"
            pieces.append(last)
        return " ".join(pieces)


@dataclass
class CommandMessage:
    """A chat message split into its command word and parameters."""

    command: str = ""
    sent_by: str = ""
    respond_to: str = ""
    params: str = ""
    full_text: str = ""

    @classmethod
    def from_irc(cls, message: IrcMessage) -> CommandMessage:
        """Build from a PRIVMSG; any other message yields an empty command."""
        if message.command.upper() != "PRIVMSG" or len(message.params) < 2:
            return cls()
        text = message.params[1]
        command = text.split(" ", 1)[0]
        remainder = text[len(command):]
        params = remainder[1:] if remainder.startswith(" ") else ""
        return cls(
            command=command,
            sent_by=message.source_nickname() or "",
            respond_to=message.response_target() or "",
            params=params,
            full_text=text,
        )