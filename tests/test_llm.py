import json
import threading
from http.server import BaseHTTPRequestHandler, HTTPServer

import pytest

from llmirc.llm import (
    LLM_MODEL,
    TOKEN_SIZE,
    LLMClient,
    Topics,
    build_payload,
    parse_stream,
)


def test_topics_start_without_topic():
    assert Topics().current() is None


def test_topics_select_known_values():
    topics = Topics()
    assert topics.select(1) == "Topic:Unix"
    assert topics.select(2) == "Topic:Cooking"
    assert topics.current() == "Topic:Cooking"
    assert topics.select(0) is None
    assert topics.current() is None


@pytest.mark.parametrize("number", [-1, 3, 9])
def test_topics_select_invalid(number):
    topics = Topics()
    topics.select(1)
    with pytest.raises(ValueError):
        topics.select(number)
    assert topics.current() == "Topic:Unix"


def test_build_payload_without_topic():
    data = json.loads(build_payload("hello"))
    assert data == {
        "model": LLM_MODEL,
        "prompt": "hello",
        "options": {"num_predict": TOKEN_SIZE},
    }


def test_build_payload_with_topic_appends_it():
    data = json.loads(build_payload("hello", "Topic:Unix", "other", 5))
    assert data["prompt"] == "hello Topic:Unix"
    assert data["model"] == "other"
    assert data["options"]["num_predict"] == 5


def test_build_payload_escapes_quotes():
    prompt = 'say "hi"'
    assert json.loads(build_payload(prompt))["prompt"] == prompt


def test_parse_stream_joins_responses():
    lines = [
        json.dumps({"response": "Hel", "done": False}),
        json.dumps({"response": "lo", "done": False}),
        json.dumps({"done": True}),
    ]
    assert parse_stream(lines) == "Hello"


def test_parse_stream_skips_bad_lines():
    lines = ["not json", "", json.dumps([1, 2]), json.dumps({"response": 3}),
             json.dumps({"response": "ok"})]
    assert parse_stream(lines) == "ok"


class _Handler(BaseHTTPRequestHandler):
    received = []

    def do_POST(self):
        length = int(self.headers["Content-Length"])
        self.received.append(json.loads(self.rfile.read(length)))
        body = "\n".join(
            json.dumps({"response": part}) for part in ["line\n", "two"]
        ).encode()
        self.send_response(200)
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def log_message(self, *args):
        pass


@pytest.fixture
def server():
    _Handler.received = []
    httpd = HTTPServer(("127.0.0.1", 0), _Handler)
    thread = threading.Thread(target=httpd.serve_forever, daemon=True)
    thread.start()
    yield httpd
    httpd.shutdown()
    httpd.server_close()


def test_generate_posts_and_collects(server, tmp_path):
    url = f"http://127.0.0.1:{server.server_address[1]}/api/generate"
    response_path = tmp_path / "response.json"
    client = LLMClient(url=url, response_path=response_path)
    reply = client.generate("what\r\nis", "Topic:Cooking")
    assert reply == "line two"
    assert _Handler.received[0]["prompt"] == "what  is Topic:Cooking"
    assert _Handler.received[0]["model"] == LLM_MODEL
    saved = response_path.read_text().splitlines()
    assert parse_stream(saved) == "line\ntwo"


def test_generate_connection_error():
    client = LLMClient(url="http://127.0.0.1:1/api/generate", timeout=2)
    with pytest.raises(OSError):
        client.generate("hello")