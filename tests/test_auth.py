import base64
import threading
from concurrent.futures import ThreadPoolExecutor

import pytest
import requests
from urllib3.exceptions import ReadTimeoutError

from conftest import FakeResponse, FakeSession, token_response
from enzona_payments.core.auth import TOKEN_SCOPE, TOKEN_URL, Credentials, TokenProvider
from enzona_payments.core.errors import AuthError, NetworkError, TimeoutError


def _provider(session, clock, **kwargs):
    return TokenProvider(
        Credentials("client-id", "client-secret"),
        session,
        timeout=5,
        clock=clock,
        **kwargs,
    )


def test_credentials_build_basic_authorization():
    header = Credentials("id", "secret").basic_authorization()
    assert header == "Basic " + base64.b64encode(b"id:secret").decode()


def test_credentials_repr_hides_secret():
    assert "secret-value" not in repr(Credentials("id", "secret-value"))


def test_exchange_sends_client_credentials_grant(clock):
    session = FakeSession(token_responses=[token_response("abc")])
    token = _provider(session, clock).get_token()

    assert token.value == "abc"
    call = session.token_calls[0]
    assert call["url"] == TOKEN_URL
    assert call["data"] == {"grant_type": "client_credentials", "scope": TOKEN_SCOPE}
    assert call["headers"]["Authorization"] == Credentials("client-id", "client-secret").basic_authorization()
    assert call["headers"]["Content-Type"] == "application/x-www-form-urlencoded"
    assert call["timeout"] == 5


def test_token_is_reused_until_safety_margin(clock):
    session = FakeSession(token_responses=[token_response("first", 100), token_response("second", 100)])
    provider = _provider(session, clock, expiry_margin=30)

    assert provider.get_token().value == "first"
    clock.advance(69)
    assert provider.get_token().value == "first"
    assert len(session.token_calls) == 1

    clock.advance(1)
    assert provider.get_token().value == "second"
    assert len(session.token_calls) == 2


def test_default_lifetime_applies_when_expiry_is_missing(clock):
    session = FakeSession(token_responses=[token_response("tok", expires_in=None)])
    token = _provider(session, clock, default_lifetime=600).get_token()
    assert token.expires_at == clock.now + 600


def test_non_200_raises_auth_error_with_body(clock):
    session = FakeSession(token_responses=[FakeResponse(401, '{"error":"invalid_client"}')])
    with pytest.raises(AuthError) as excinfo:
        _provider(session, clock).get_token()

    assert excinfo.value.http_status == 401
    assert "invalid_client" in excinfo.value.raw_body
    assert excinfo.value.during_token_exchange


def test_unreadable_body_raises_auth_error_with_cause(clock):
    session = FakeSession(token_responses=[FakeResponse(200, "<html>oops</html>")])
    with pytest.raises(AuthError) as excinfo:
        _provider(session, clock).get_token()
    assert isinstance(excinfo.value.cause, ValueError)


def test_missing_access_token_raises_auth_error(clock):
    session = FakeSession(token_responses=[FakeResponse(200, {"expires_in": 10})])
    with pytest.raises(AuthError):
        _provider(session, clock).get_token()


def test_transport_failure_is_wrapped(clock):
    session = FakeSession(token_responses=[requests.ConnectionError("refused")])
    with pytest.raises(AuthError) as excinfo:
        _provider(session, clock).get_token()
    assert isinstance(excinfo.value.cause, requests.ConnectionError)


def test_exchange_timeout_raises_timeout_error(clock):
    session = FakeSession(token_responses=[requests.Timeout("slow")])
    with pytest.raises(TimeoutError) as excinfo:
        _provider(session, clock).get_token()
    assert isinstance(excinfo.value, NetworkError)


def test_failed_exchange_is_not_cached(clock):
    session = FakeSession(token_responses=[FakeResponse(500, "down"), token_response("ok")])
    provider = _provider(session, clock)
    with pytest.raises(AuthError):
        provider.get_token()
    assert provider.get_token().value == "ok"
    assert len(session.token_calls) == 2


def test_invalidate_forces_new_exchange(clock):
    session = FakeSession(token_responses=[token_response("a"), token_response("b")])
    provider = _provider(session, clock)
    assert provider.get_token().value == "a"
    provider.invalidate()
    assert provider.get_token().value == "b"


def _run_concurrently(provider, count):
    def call():
        try:
            return provider.get_token().value
        except AuthError as exc:
            return exc

    with ThreadPoolExecutor(max_workers=count) as pool:
        futures = [pool.submit(call) for _ in range(count)]
        return [future.result(timeout=5) for future in futures]


def test_concurrent_callers_share_one_exchange(clock):
    release = threading.Event()

    def slow_exchange(call):
        release.wait(timeout=5)
        return token_response("shared")

    session = FakeSession(token_responses=[slow_exchange])
    provider = _provider(session, clock)

    timer = threading.Timer(0.2, release.set)
    timer.start()
    results = _run_concurrently(provider, 8)
    timer.join()

    assert results == ["shared"] * 8
    assert len(session.token_calls) == 1


def test_concurrent_callers_observe_the_same_failure(clock):
    release = threading.Event()

    def failing_exchange(call):
        release.wait(timeout=5)
        return FakeResponse(401, "bad credentials")

    session = FakeSession(token_responses=[failing_exchange])
    provider = _provider(session, clock)

    timer = threading.Timer(0.2, release.set)
    timer.start()
    results = _run_concurrently(provider, 6)
    timer.join()

    assert len(session.token_calls) == 1
    assert all(isinstance(item, AuthError) for item in results)
    assert len({id(item) for item in results}) == 1


def test_stalled_token_body_raises_timeout_error(clock):
    stalled = requests.ConnectionError(ReadTimeoutError(None, TOKEN_URL, "Read timed out."))
    session = FakeSession(token_responses=[stalled])
    with pytest.raises(TimeoutError) as excinfo:
        _provider(session, clock).get_token()
    assert excinfo.value.cause is stalled


def test_short_lived_token_is_still_cached(clock):
    session = FakeSession(token_responses=[token_response("brief", 20), token_response("next", 20)])
    provider = _provider(session, clock, expiry_margin=30)

    token = provider.get_token()
    assert token.refresh_at == clock.now + 10
    clock.advance(9)
    assert provider.get_token().value == "brief"
    assert len(session.token_calls) == 1

    clock.advance(1)
    assert provider.get_token().value == "next"


def test_invalidating_a_stale_token_keeps_the_newer_one(clock):
    session = FakeSession(token_responses=[token_response("old"), token_response("new")])
    provider = _provider(session, clock)
    old = provider.get_token()
    provider.invalidate()
    new = provider.get_token()

    provider.invalidate(old)
    assert provider.get_token() is new
    assert len(session.token_calls) == 2

    provider.invalidate(new)
    provider.get_token()
    assert len(session.token_calls) == 3
