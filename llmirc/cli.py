"""Command line entry point of the bot."""

from __future__ import annotations

import argparse
import socket
import sys
from typing import Optional, Sequence

from llmirc.bot import Bot, ChatLog
from llmirc.config import (
    ADMIN_CONFIG_PATH,
    CHANNELS_CONFIG_PATH,
    DEFAULT_NICK,
    DEFAULT_PORT,
    DEFAULT_SERVER,
    LOG_PATH,
    RESPONSE_PATH,
    ConfigError,
    read_admin_config,
    read_channels,
)
from llmirc.connection import Connector
from llmirc.llm import LLMClient


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="llmirc",
        description="IRC channel bot that answers messages with generated text.",
    )
    parser.add_argument("--server", default=DEFAULT_SERVER, help="IRC server address")
    parser.add_argument("--port", type=int, default=DEFAULT_PORT, help="IRC server port")
    parser.add_argument("--nick", default=DEFAULT_NICK, help="nick to register with")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Check the working files, then run the bot until it stops."""
    args = _parser().parse_args(argv)

    if not (ADMIN_CONFIG_PATH.exists() and CHANNELS_CONFIG_PATH.exists()):
        print("Missing required config files", file=sys.stderr)
        return 1
    if not LOG_PATH.exists():
        print("Missing required log file", file=sys.stderr)
        return 1
    if not RESPONSE_PATH.exists():
        print("Missing required response file", file=sys.stderr)
        return 1

    try:
        admin = read_admin_config(ADMIN_CONFIG_PATH)
        channels = read_channels(CHANNELS_CONFIG_PATH)
    except ConfigError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    llm = LLMClient(response_path=RESPONSE_PATH)
    with ChatLog(LOG_PATH) as chat_log:

        def session(sock: socket.socket) -> None:
            Bot(sock, channels, admin, llm, chat_log=chat_log).run()

        Connector(session, host=args.server, port=args.port, nick=args.nick).run()

    print("Bye")
    return 0


if __name__ == "__main__":
    sys.exit(main())