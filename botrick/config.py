"""Bot configuration stored as TOML."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import tomli_w

PKG_NAME = "botrick"
PKG_VERSION = "0.9.0"
VERSION_STR = f"{PKG_NAME} {PKG_VERSION}"


@dataclass
class Config:
    """Runtime settings for the bot."""

    command_prefix: str = "\0"
    inspect_urls: bool = False
    inspect_rejects: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Config:
        """Build a config from a mapping; every field is required."""
        try:
            prefix = data["command_prefix"]
            inspect_urls = data["inspect_urls"]
            rejects = data["inspect_rejects"]
        except KeyError as exc:
            raise ValueError(f"missing field {exc.args[0]!r}") from None
        if not isinstance(prefix, str) or len(prefix) != 1:
            raise ValueError("command_prefix must be a single character")
        if not isinstance(inspect_urls, bool):
            raise ValueError("inspect_urls must be a boolean")
        if not isinstance(rejects, list) or not all(isinstance(r, str) for r in rejects):
            raise ValueError("inspect_rejects must be a list of strings")
        return cls(command_prefix=prefix, inspect_urls=inspect_urls, inspect_rejects=list(rejects))

    def to_dict(self) -> dict[str, Any]:
        return {
            "command_prefix": self.command_prefix,
            "inspect_urls": self.inspect_urls,
            "inspect_rejects": list(self.inspect_rejects),
        }


def load_config(path: str | Path) -> Config:
    """Load the config at ``path``, writing the defaults there if it is missing."""
    path = Path(path)
    if not path.exists():
        config = Config()
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(tomli_w.dumps(config.to_dict()), encoding="utf-8")
        return config
    with path.open("rb") as fh:
        data = tomllib.load(fh)
    return Config.from_dict(data)