"""Shared fixtures for the Circonus API client tests."""

import json
from typing import Any, Dict, List, Optional, Tuple

import pytest

from circonus_api.config import CirconusConfig


class RecordingTransport:
    """In-memory stand-in for CirconusAPIClient.

    Responses are registered per (method, path); bodies may be bytes, a
    JSON-serialisable object, or an exception to raise.
    """

    def __init__(self, debug: bool = False):
        self.calls: List[Tuple[str, str, Optional[Any]]] = []
        self.responses: Dict[Tuple[str, str], Any] = {}
        self.lines: List[str] = []
        self.debug_enabled = debug
        self.closed = False

    def respond(self, method: str, path: str, body: Any) -> None:
        self.responses[(method, path)] = body

    def _answer(self, method: str, path: str, body: Any = None) -> bytes:
        self.calls.append((method, path, body))
        answer = self.responses.get((method, path), b"{}")
        if isinstance(answer, Exception):
            raise answer
        if isinstance(answer, bytes):
            return answer
        return json.dumps(answer).encode("utf-8")

    def get(self, path):
        return self._answer("GET", path)

    def put(self, path, body):
        return self._answer("PUT", path, body)

    def post(self, path, body):
        return self._answer("POST", path, body)

    def delete(self, path):
        return self._answer("DELETE", path)

    def log_line(self, line):
        self.lines.append(line)

    def close(self):
        self.closed = True

    def sent_json(self, index: int = -1) -> Dict[str, Any]:
        return json.loads(self.calls[index][2])


ENV_VARS = [
    "CIRCONUS_API_TOKEN",
    "CIRCONUS_API_APP",
    "CIRCONUS_API_URL",
    "CIRCONUS_API_DEBUG",
    "CIRCONUS_API_TIMEOUT",
    "CIRCONUS_API_MAX_RETRIES",
    "CIRCONUS_API_MIN_RETRY_DELAY",
    "CIRCONUS_API_MAX_RETRY_DELAY",
    "CIRCONUS_LOG_LEVEL",
    "CIRCONUS_LOG_FORMAT",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def transport():
    return RecordingTransport()


@pytest.fixture
def debug_transport():
    return RecordingTransport(debug=True)


@pytest.fixture
def config():
    return CirconusConfig(
        token_key="01234567-89ab-cdef-0123-456789abcdef",
        app_name="test-app",
        url="https://api.example.com/v2",
        max_retries=2,
        min_retry_delay=0.0,
        max_retry_delay=0.0
    )
