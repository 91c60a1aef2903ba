"""HTTP client for text generation requests used to answer chat messages."""

from __future__ import annotations

import json
import logging
import threading
import urllib.request
from pathlib import Path
from typing import Iterable, Optional, Union

from llmirc.text import flatten_newlines

LLM_URL = "http://localhost:11434/api/generate"
LLM_MODEL = "llama3.2"
TOKEN_SIZE = 30

DEFAULT_TOPICS = ("Topic:Unix", "Topic:Cooking")

log = logging.getLogger(__name__)


class Topics:
    """The topic appended to prompts; 0 means none, 1 and 2 pick a topic."""

    def __init__(self, choices: Iterable[str] = DEFAULT_TOPICS) -> None:
        self.choices = tuple(choices)
        self.number = 0
        self._lock = threading.Lock()

    def current(self) -> Optional[str]:
        """Return the selected topic, or None when no topic is in use."""
        with self._lock:
            if self.number == 0:
                return None
            return self.choices[self.number - 1]

    def select(self, number: int) -> Optional[str]:
        """Select topic `number` (0 for none) and return it."""
        if not 0 <= number <= len(self.choices):
            raise ValueError(f"topic choice {number} is invalid")
        with self._lock:
            self.number = number
        return self.current()


def build_payload(
    prompt: str,
    topic: Optional[str] = None,
    model: str = LLM_MODEL,
    token_size: int = TOKEN_SIZE,
) -> str:
    """Return the JSON request body for a generation request."""
    text = f"{prompt} {topic}" if topic else prompt
    return json.dumps(
        {"model": model, "prompt": text, "options": {"num_predict": token_size}}
    )


def parse_stream(lines: Iterable[Union[str, bytes]]) -> str:
    """Join the "response" strings of a stream of JSON lines."""
    parts = []
    for line in lines:
        if not line.strip():
            continue
        try:
            item = json.loads(line)
        except ValueError:
            log.warning("error reading JSON line: %r", line)
            continue
        if isinstance(item, dict):
            response = item.get("response")
            if isinstance(response, str):
                parts.append(response)
    return "".join(parts)


class LLMClient:
    """Sends prompts to the generation endpoint and collects the reply."""

    def __init__(
        self,
        url: str = LLM_URL,
        model: str = LLM_MODEL,
        token_size: int = TOKEN_SIZE,
        response_path: Optional[Union[str, Path]] = None,
        timeout: float = 300.0,
    ) -> None:
        self.url = url
        self.model = model
        self.token_size = token_size
        self.response_path = Path(response_path) if response_path else None
        self.timeout = timeout
        self._lock = threading.Lock()

    def generate(self, prompt: str, topic: Optional[str] = None) -> str:
        """Return the reply to `prompt`, flattened to one line."""
        payload = build_payload(
            flatten_newlines(prompt), topic, self.model, self.token_size
        )
        request = urllib.request.Request(
            self.url,
            data=payload.encode("utf-8"),
            headers={"Content-Type": "application/json"},
            method="POST",
        )
        with self._lock:
            with urllib.request.urlopen(request, timeout=self.timeout) as response:
                body = response.read()
            if self.response_path is not None:
                self.response_path.write_bytes(body)
        text = body.decode("utf-8", errors="replace")
        return flatten_newlines(parse_stream(text.splitlines()))