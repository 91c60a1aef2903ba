"""Deciding where each chunk received from the server has to go."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Iterable, Optional

from llmirc.admin import BotState

PONG = "PONG\r\n"


class RouteKind(enum.Enum):
    """Destinations of received data."""

    PING = "ping"
    ADMIN = "admin"
    CHANNEL = "channel"


@dataclass(frozen=True)
class Route:
    """One destination for a chunk of server data."""

    kind: RouteKind
    data: str
    channel: Optional[str] = None
    index: Optional[int] = None


class Router:
    """Sends server data to the pinger, the admin handler or channel workers."""

    def __init__(
        self,
        channels: Iterable[str],
        admin_channel: str,
        state: Optional[BotState] = None,
    ) -> None:
        self.channels = list(channels)
        self.admin_channel = admin_channel
        self.state = state if state is not None else BotState()

    def route(self, data: str) -> list[Route]:
        """Return every destination of `data`; empty when nobody wants it."""
        if "PING :" in data:
            return [Route(RouteKind.PING, data)]
        if f"PRIVMSG {self.admin_channel}" in data:
            return [Route(RouteKind.ADMIN, data, channel=self.admin_channel)]
        routes = []
        for index, channel in enumerate(self.channels):
            if f"PRIVMSG {channel}" not in data:
                continue
            if self.state.is_muted(channel) or self.state.is_ignored(data):
                continue
            routes.append(Route(RouteKind.CHANNEL, data, channel=channel, index=index))
        return routes