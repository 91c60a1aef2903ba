"""The running bot: one reader, one admin worker and one worker per channel."""

from __future__ import annotations

import logging
import queue
import socket
import threading
from pathlib import Path
from typing import Optional, Protocol, Sequence, TextIO, Union

from llmirc.admin import AdminHandler, BotState
from llmirc.config import LOG_PATH, MAX_CHANNELS, AdminConfig
from llmirc.llm import Topics
from llmirc.router import PONG, Router, RouteKind
from llmirc.text import extract_message

BUFFER_SIZE = 1023

log = logging.getLogger(__name__)


class _Generator(Protocol):
    def generate(self, prompt: str, topic: Optional[str] = None) -> str: ...


class ChatLog:
    """Append-only log of the traffic between the bot and the server."""

    def __init__(self, path: Union[str, Path] = LOG_PATH) -> None:
        self.path = Path(path)
        self._file: TextIO = open(self.path, "a", encoding="utf-8")
        self._lock = threading.Lock()

    def write(self, message: str) -> None:
        """Append `message` as one entry; empty messages are skipped."""
        if not message:
            return
        with self._lock:
            self._file.write(f"{message}\n")
            self._file.flush()

    def close(self) -> None:
        """Close the log file."""
        with self._lock:
            self._file.close()

    def __enter__(self) -> "ChatLog":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


class Bot:
    """Answers channel messages with the model and obeys the admin channel."""

    def __init__(
        self,
        sock: socket.socket,
        channels: Sequence[str],
        admin: AdminConfig,
        llm: _Generator,
        chat_log: Optional[ChatLog] = None,
        state: Optional[BotState] = None,
        topics: Optional[Topics] = None,
        poll_interval: float = 0.2,
    ) -> None:
        channels = list(channels)
        if not 0 < len(channels) <= MAX_CHANNELS:
            raise ValueError(
                f"the number of channels must be between 1 and {MAX_CHANNELS}"
            )
        self.sock = sock
        self.channels = channels
        self.admin = admin
        self.llm = llm
        self.chat_log = chat_log
        self.state = state if state is not None else BotState()
        self.topics = topics if topics is not None else Topics()
        self.poll_interval = poll_interval
        self.router = Router(channels, admin.name, self.state)
        self.admin_handler = AdminHandler(admin.name, self.state, self.topics)
        self._send_lock = threading.Lock()
        self._stopping = threading.Event()
        self._alive = True
        self._admin_inbox: queue.Queue[Optional[str]] = queue.Queue()
        self._channel_inboxes: list[queue.Queue[Optional[str]]] = []

    def _log(self, message: str) -> None:
        if self.chat_log is not None:
            self.chat_log.write(message)

    def _send(self, text: str) -> None:
        try:
            with self._send_lock:
                self.sock.sendall(text.encode("utf-8"))
        except OSError as exc:
            log.warning("failed to send to server: %s", exc)

    def run(self) -> None:
        """Serve until stopped; raise ConnectionError if the server went away."""
        self._stopping.clear()
        self._alive = True
        self._admin_inbox = queue.Queue()
        self._channel_inboxes = [queue.Queue() for _ in self.channels]
        self.sock.settimeout(self.poll_interval)

        threads = [
            threading.Thread(target=self._read_loop, name="reader", daemon=True),
            threading.Thread(target=self._admin_loop, name="admin", daemon=True),
        ]
        threads.extend(
            threading.Thread(
                target=self._channel_loop,
                args=(channel, inbox),
                name=f"channel {channel}",
                daemon=True,
            )
            for channel, inbox in zip(self.channels, self._channel_inboxes)
        )
        for thread in threads:
            thread.start()

        try:
            while not self._stopping.wait(self.poll_interval):
                pass
        except KeyboardInterrupt:
            self.stop()

        if self._alive:
            print("Performing graceful exit... Please wait...")
        else:
            print("It appears that socket has disconnected... Please wait...")
        for thread in threads:
            thread.join()
        self._send("QUIT")
        if not self._alive:
            raise ConnectionError("connection to the server was lost")

    def stop(self) -> None:
        """Ask every worker to finish; run() then returns."""
        if self._stopping.is_set():
            return
        self._stopping.set()
        self._admin_inbox.put(None)
        for inbox in self._channel_inboxes:
            inbox.put(None)

    def _read_loop(self) -> None:
        while not self._stopping.is_set():
            try:
                chunk = self.sock.recv(BUFFER_SIZE)
            except (socket.timeout, BlockingIOError, InterruptedError):
                continue
            except OSError:
                chunk = b""
            if not chunk:
                self._alive = False
                self.stop()
                return
            data = chunk.decode("utf-8", errors="replace")
            self._log(data)
            for route in self.router.route(data):
                if route.kind is RouteKind.PING:
                    self._send(PONG)
                    self._log(PONG)
                elif route.kind is RouteKind.ADMIN:
                    self._admin_inbox.put(data)
                elif route.index is not None:
                    self._channel_inboxes[route.index].put(data)

    def _admin_loop(self) -> None:
        name = self.admin.name
        self._send(f"JOIN {name}\r\n")
        self._send(f"MODE {name} +k {self.admin.password}\r\n")
        for data in iter(self._admin_inbox.get, None):
            action = self.admin_handler.handle(data)
            if action.reply:
                self._send(action.reply)
            if action.poweroff:
                self.stop()

    def _channel_loop(self, channel: str, inbox: "queue.Queue[Optional[str]]") -> None:
        self._send(f"JOIN {channel}\r\n")
        for data in iter(inbox.get, None):
            prompt = extract_message(data)
            try:
                reply = self.llm.generate(prompt, self.topics.current())
            except OSError as exc:
                log.warning("model request failed: %s", exc)
                continue
            self._send(f"PRIVMSG {channel} :{reply}\r\n")
            self._log(reply + channel)