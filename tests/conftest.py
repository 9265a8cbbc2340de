"""
Pytest configuration and shared fixtures.

Fixtures available to all tests:
  • backend          — recording fake of the WaterX REST API
  • api              — ApiClient wired to the fake backend
  • signal_recorder  — collects emissions of any Qt signal
  • auth             — AuthSession with a signed-in admin (no INI persistence)
"""

from __future__ import annotations

import json
import os
import sys

import httpx
import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

# Ensure the project root is on the path so package imports resolve.
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from waterx_admin.api import ApiClient  # noqa: E402
from waterx_admin.stores import AuthSession  # noqa: E402


class FakeBackend:
    """Routes (method, path) to canned responses and records every request."""

    def __init__(self):
        self.routes = {}
        self.requests: list[httpx.Request] = []

    def route(self, method: str, path: str, status: int = 200, json_body=None, *, raises=None, content=None,
              on_request=None):
        self.routes[(method, path)] = (status, json_body, raises, content, on_request)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        key = (request.method, request.url.path)
        if key not in self.routes:
            return httpx.Response(404, json={"success": False, "error": "Not found"})
        status, body, raises, content, on_request = self.routes[key]
        if on_request is not None:
            on_request(request)
        if raises is not None:
            raise raises
        if content is not None:
            return httpx.Response(status, content=content)
        return httpx.Response(status, json=body)

    def calls(self, method: str, path: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.method == method and r.url.path == path]

    @staticmethod
    def body(request: httpx.Request):
        return json.loads(request.content)


@pytest.fixture
def backend():
    return FakeBackend()


@pytest.fixture
def api(backend):
    client = ApiClient("http://waterx.test", transport=httpx.MockTransport(backend))
    yield client
    client.close()


class SignalRecorder:
    def __init__(self):
        self.emitted = {}

    def watch(self, signal, name: str):
        self.emitted[name] = []
        signal.connect(lambda *args: self.emitted[name].append(args if len(args) != 1 else args[0]))
        return self.emitted[name]


@pytest.fixture
def signal_recorder():
    return SignalRecorder()


@pytest.fixture
def auth():
    session = AuthSession()
    session.login("emp-1", "Ada Admin", "admin")
    return session


@pytest.fixture
def qapp():
    from PySide6.QtWidgets import QApplication

    return QApplication.instance() or QApplication([])
