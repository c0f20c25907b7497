"""Fakes standing in for ``requests.Session`` so no test touches the network."""

import json
import threading

import pytest

from enzona_payments.core.config import EnzonaConfig


class FakeResponse:
    def __init__(self, status_code=200, body="", headers=None, encoding="utf-8"):
        if not isinstance(body, str):
            body = json.dumps(body)
        self.status_code = status_code
        self.text = body
        self.headers = headers or {}
        self.encoding = encoding
        self.closed = False

    def iter_content(self, chunk_size=1):
        data = self.text.encode("utf-8")
        for start in range(0, len(data), chunk_size):
            yield data[start:start + chunk_size]

    def close(self):
        self.closed = True


class FakeSession:
    """
    Records calls. ``token_responses`` feeds ``post`` (the token exchange),
    ``responses`` feeds ``request`` (resource calls). Entries may be a
    ``FakeResponse``, an exception instance to raise, or a callable.
    """

    def __init__(self, responses=None, token_responses=None):
        self.responses = list(responses or [])
        self.token_responses = list(token_responses or [])
        self.token_calls = []
        self.requests = []
        self.closed = False
        self._lock = threading.Lock()

    @staticmethod
    def _resolve(entry, call):
        if callable(entry) and not isinstance(entry, FakeResponse):
            entry = entry(call)
        if isinstance(entry, BaseException):
            raise entry
        return entry

    def post(self, url, data=None, headers=None, timeout=None):
        call = {"url": url, "data": data, "headers": headers, "timeout": timeout}
        with self._lock:
            self.token_calls.append(call)
            entry = self.token_responses[0] if len(self.token_responses) == 1 else self.token_responses.pop(0)
        return self._resolve(entry, call)

    def request(self, method, url, data=None, headers=None, timeout=None, stream=False):
        call = {
            "method": method,
            "url": url,
            "data": data,
            "headers": headers,
            "timeout": timeout,
            "stream": stream,
        }
        with self._lock:
            self.requests.append(call)
            entry = self.responses.pop(0)
        return self._resolve(entry, call)

    def close(self):
        self.closed = True


def token_response(value="tok-1", expires_in=3600):
    body = {"access_token": value, "token_type": "Bearer"}
    if expires_in is not None:
        body["expires_in"] = expires_in
    return FakeResponse(200, body)


class FakeClock:
    def __init__(self, now=1000.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


@pytest.fixture
def config():
    return EnzonaConfig(client_id="client-id", client_secret="client-secret", timeout_seconds=5)


@pytest.fixture
def clock():
    return FakeClock()
