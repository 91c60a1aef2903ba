"""Connecting to the IRC server, logging in and retrying when it fails."""

from __future__ import annotations

import socket
import time
from contextlib import closing
from typing import Callable, Optional

from llmirc.config import DEFAULT_NICK, DEFAULT_PORT, DEFAULT_SERVER

MAX_ATTEMPTS = 5
FIRST_DELAY = 5
DELAY_STEP = 20
AUTH_PAUSE = 2.0


def authenticate(
    stream: socket.socket, nick: str = DEFAULT_NICK, pause: float = AUTH_PAUSE
) -> None:
    """Register with the server using `nick` as nick, user and real name."""
    stream.sendall(f"NICK {nick}\r\n".encode("utf-8"))
    time.sleep(pause)
    stream.sendall(f"USER {nick} 0 * :{nick}\r\n".encode("utf-8"))
    time.sleep(pause)


class Connector:
    """Runs a session over a server connection, reconnecting when it is lost.

    `session` is called with the connected socket and raises ConnectionError
    when the server goes away; any other return ends the program.
    """

    def __init__(
        self,
        session: Callable[[socket.socket], object],
        host: str = DEFAULT_SERVER,
        port: int = DEFAULT_PORT,
        nick: str = DEFAULT_NICK,
        attempts: int = MAX_ATTEMPTS,
        delay: int = FIRST_DELAY,
        delay_step: int = DELAY_STEP,
        auth_pause: float = AUTH_PAUSE,
        connect: Optional[Callable[[], socket.socket]] = None,
        sleep: Callable[[float], object] = time.sleep,
    ) -> None:
        self.session = session
        self.host = host
        self.port = port
        self.nick = nick
        self.attempts = attempts
        self.delay = delay
        self.delay_step = delay_step
        self.auth_pause = auth_pause
        self._connect = connect or (
            lambda: socket.create_connection((self.host, self.port))
        )
        self.sleep = sleep

    def run(self) -> bool:
        """Return True when a session ended normally, False when giving up."""
        attempts = self.attempts
        delay = self.delay
        while attempts > 0:
            try:
                sock = self._connect()
            except OSError:
                print(f"Connection refused... Retrying in {delay} seconds...")
            else:
                with closing(sock):
                    print("Connection established")
                    try:
                        authenticate(sock, self.nick, self.auth_pause)
                        print("Connected to the server")
                        self.session(sock)
                    except ConnectionError:
                        print(f"Connection lost... Retrying in {delay} seconds...")
                    else:
                        print("Shutting down... ")
                        return True
            attempts -= 1
            print(f"Attempts left: {attempts} ")
            try:
                self.sleep(delay)
            except KeyboardInterrupt:
                print("Exit signal caught")
                attempts = 0
            delay += self.delay_step
        print("Shutting down... ")
        return False