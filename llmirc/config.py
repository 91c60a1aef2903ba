"""Configuration files and fixed settings of the bot."""

from __future__ import annotations

import itertools
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Union

DEFAULT_SERVER = "10.1.0.46"
DEFAULT_PORT = 6667
DEFAULT_NICK = "bkaza0056"

MAX_CHANNELS = 32

ADMIN_CONFIG_PATH = Path("config/admin.cfg")
CHANNELS_CONFIG_PATH = Path("config/channels.cfg")
LOG_PATH = Path("logs/chat.log")
RESPONSE_PATH = Path("responses/response.json")

_NAME_FIELD = "name: "
_SECOND_FIELD = "password: "

PathLike = Union[str, Path]


class ConfigError(Exception):
    """Raised when a configuration file is missing or unusable."""


@dataclass(frozen=True)
class AdminConfig:
    """Name and key of the admin channel."""

    name: str
    password: str


def _strip_line(line: str) -> str:
    return line.partition("\n")[0]


def parse_channels(lines: Iterable[str]) -> list[str]:
    """Return the channel names, one per line, at most MAX_CHANNELS of them."""
    channels = [_strip_line(line) for line in itertools.islice(lines, MAX_CHANNELS)]
    if not channels:
        raise ConfigError(
            "no channels configured, please adjust your channels.cfg file"
        )
    return channels


def parse_admin_config(lines: Iterable[str]) -> AdminConfig:
    """Read the admin channel name and password from 'name: ' and 'password: ' lines."""
    name = None
    password = None
    for raw in lines:
        line = _strip_line(raw)
        if _NAME_FIELD in line:
            name = line[len(_NAME_FIELD):]
        elif _SECOND_FIELD in line:
            password = line[len(_SECOND_FIELD):]
    if name is None:
        raise ConfigError("admin configuration has no 'name: ' line")
    if password is None:
        raise ConfigError("admin configuration has no 'password: ' line")
    return AdminConfig(name=name, password=password)


def read_channels(path: PathLike = CHANNELS_CONFIG_PATH) -> list[str]:
    """Read the channel list from a file."""
    try:
        with open(path, encoding="utf-8") as handle:
            return parse_channels(handle)
    except OSError as exc:
        raise ConfigError(f"failed to access file {path}: {exc}") from exc


def read_admin_config(path: PathLike = ADMIN_CONFIG_PATH) -> AdminConfig:
    """Read the admin channel configuration from a file."""
    try:
        with open(path, encoding="utf-8") as handle:
            return parse_admin_config(handle)
    except OSError as exc:
        raise ConfigError(f"failed to access file {path}: {exc}") from exc