"""Shared bot state and the commands accepted on the admin channel."""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Optional

from llmirc.llm import Topics
from llmirc.text import extract_message

MAX_IGNORED_USERS = 10
MAX_MUTED_CHANNELS = 32

_IGNORE = "ignore "
_POWEROFF = "poweroff"
_DONOTCHAT = "donotchat "
_TOPIC = "topic "


class BotState:
    """Users whose messages are ignored and channels the bot stays quiet in."""

    def __init__(self) -> None:
        self._ignored: list[str] = []
        self._muted: list[str] = []
        self._lock = threading.Lock()

    @property
    def ignored_users(self) -> tuple[str, ...]:
        with self._lock:
            return tuple(self._ignored)

    @property
    def muted_channels(self) -> tuple[str, ...]:
        with self._lock:
            return tuple(self._muted)

    def ignore(self, user: str) -> None:
        """Add `user` to the ignore list; ValueError when the list is full."""
        with self._lock:
            if len(self._ignored) >= MAX_IGNORED_USERS:
                raise ValueError("maximum number of ignored users has been reached")
            self._ignored.append(user)

    def mute(self, channel: str) -> None:
        """Add `channel` to the muted list; ValueError when the list is full."""
        with self._lock:
            if len(self._muted) >= MAX_MUTED_CHANNELS:
                raise ValueError("maximum number of muted channels has been reached")
            self._muted.append(channel)

    def is_muted(self, channel: str) -> bool:
        """Whether the bot must not answer in `channel`."""
        with self._lock:
            return channel in self._muted

    def is_ignored(self, line: str) -> bool:
        """Whether the IRC line was sent by an ignored user."""
        with self._lock:
            return any(f":{user}!" in line for user in self._ignored)


@dataclass(frozen=True)
class AdminAction:
    """Outcome of an admin command: a line to send and whether to shut down."""

    reply: Optional[str] = None
    poweroff: bool = False


def _argument(text: str, offset: int) -> str:
    return text.partition("\r")[0][offset:]


class AdminHandler:
    """Interprets the messages posted on the admin channel."""

    def __init__(
        self,
        name: str,
        state: Optional[BotState] = None,
        topics: Optional[Topics] = None,
    ) -> None:
        self.name = name
        self.state = state if state is not None else BotState()
        self.topics = topics if topics is not None else Topics()

    def _reply(self, text: str) -> AdminAction:
        return AdminAction(reply=f"PRIVMSG {self.name} :{text}\r\n")

    def handle(self, line: str) -> AdminAction:
        """Apply the command carried by an admin channel line."""
        text = extract_message(line)
        if _IGNORE in text:
            return self._ignore(text)
        if _POWEROFF in text:
            return AdminAction(poweroff=True)
        if _DONOTCHAT in text:
            return self._mute(text)
        if _TOPIC in text:
            return self._topic(text)
        return AdminAction()

    def _ignore(self, text: str) -> AdminAction:
        user = _argument(text, len(_IGNORE))
        try:
            self.state.ignore(user)
        except ValueError:
            return self._reply(
                "It seems that the maximum number of ignored users has been reached"
            )
        return self._reply(f"User {user} will now be ignored")

    def _mute(self, text: str) -> AdminAction:
        channel = _argument(text, len(_DONOTCHAT))
        try:
            self.state.mute(channel)
        except ValueError:
            return self._reply(
                "It seems that the maximum number of muted channels has been reached"
            )
        return self._reply(f"Channel {channel} will now be ignored")

    def _topic(self, text: str) -> AdminAction:
        choice = text[len(_TOPIC):len(_TOPIC) + 1]
        if choice not in ("0", "1", "2"):
            return self._reply("Topic choice is invalid")
        try:
            topic = self.topics.select(int(choice))
        except ValueError:
            return self._reply("Topic choice is invalid")
        if topic is None:
            return self._reply("No topic will be used now")
        return self._reply(f"Topic: {topic} will be used now")