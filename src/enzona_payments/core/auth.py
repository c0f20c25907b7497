"""
Client-credentials authentication against the Enzona token endpoint.

:class:`TokenProvider` caches the bearer token per client instance and makes
sure concurrent callers that find the cache empty or stale share a single
token exchange.
"""

from __future__ import annotations

import base64
import json
import logging
import threading
import time
from concurrent.futures import Future
from dataclasses import dataclass, field
from typing import Callable, Optional

import requests

from .errors import AuthError, TimeoutError, is_timeout

__all__ = [
    "TOKEN_SCOPE",
    "TOKEN_URL",
    "Credentials",
    "Token",
    "TokenProvider",
]

TOKEN_URL = "https://api.enzona.net/token"
TOKEN_SCOPE = "enzona_business_payment"


@dataclass(frozen=True)
class Credentials:
    client_id: str
    client_secret: str = field(repr=False)

    def basic_authorization(self) -> str:
        pair = f"{self.client_id}:{self.client_secret}".encode("utf-8")
        return "Basic " + base64.b64encode(pair).decode("ascii")


@dataclass(frozen=True)
class Token:
    value: str = field(repr=False)
    expires_at: float
    # when the cached token stops being handed out
    refresh_at: float

    def is_fresh(self, now: float) -> bool:
        return now < self.refresh_at


class TokenProvider:
    """
    Owns the access-token lifecycle for one client.

    Tokens are fetched lazily: there is no background refresh, the next
    :meth:`get_token` call after the safety margin is reached performs the
    exchange.
    """

    def __init__(
        self,
        credentials: Credentials,
        session: requests.Session,
        *,
        timeout: float = 30.0,
        default_lifetime: float = 3600,
        expiry_margin: float = 30,
        token_url: str = TOKEN_URL,
        scope: str = TOKEN_SCOPE,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._credentials = credentials
        self._session = session
        self._timeout = timeout
        self._default_lifetime = default_lifetime
        self._expiry_margin = expiry_margin
        self._token_url = token_url
        self._scope = scope
        self._clock = clock

        self._lock = threading.Lock()
        self._token: Optional[Token] = None
        self._inflight: Optional[Future] = None

    def get_token(self) -> Token:
        with self._lock:
            token = self._token
            if token is not None and token.is_fresh(self._clock()):
                return token
            inflight = self._inflight
            leader = inflight is None
            if leader:
                inflight = Future()
                self._inflight = inflight

        if not leader:
            # Propagates the leader's AuthError unchanged.
            return inflight.result()

        try:
            token = self._exchange()
        except BaseException as exc:
            with self._lock:
                self._inflight = None
            inflight.set_exception(exc)
            raise

        with self._lock:
            self._token = token
            self._inflight = None
        inflight.set_result(token)
        return token

    def invalidate(self, token: Optional[Token] = None) -> None:
        """
        Drop the cached token so the next call performs a fresh exchange.

        With ``token``, the cache is only cleared if it still holds that token,
        so a rejection of an old token does not discard a newer one.
        """
        with self._lock:
            if token is None or self._token is token:
                self._token = None

    def _exchange(self) -> Token:
        headers = {
            "Authorization": self._credentials.basic_authorization(),
            "Content-Type": "application/x-www-form-urlencoded",
            "Accept": "application/json",
        }
        payload = {"grant_type": "client_credentials", "scope": self._scope}
        logging.info("Requesting access token from %s", self._token_url)
        try:
            response = self._session.post(
                self._token_url,
                data=payload,
                headers=headers,
                timeout=self._timeout,
            )
            body = response.text
        except requests.RequestException as exc:
            if is_timeout(exc):
                raise TimeoutError(
                    f"Token exchange timed out after {self._timeout}s", cause=exc
                ) from exc
            raise AuthError(
                f"Token exchange failed: {exc}",
                during_token_exchange=True,
                cause=exc,
            ) from exc

        if response.status_code != 200:
            logging.warning("Token exchange rejected with HTTP %s", response.status_code)
            raise AuthError(
                "Failed to retrieve access token",
                during_token_exchange=True,
                http_status=response.status_code,
                raw_body=body,
            )

        issued_at = self._clock()
        try:
            data = json.loads(body)
            value = data["access_token"]
            expires_in = data.get("expires_in")
            lifetime = float(expires_in) if expires_in is not None else self._default_lifetime
        except (ValueError, TypeError, KeyError, AttributeError) as exc:
            raise AuthError(
                "Token endpoint returned an unreadable response",
                during_token_exchange=True,
                http_status=response.status_code,
                raw_body=body,
                cause=exc,
            ) from exc

        if not isinstance(value, str) or not value:
            raise AuthError(
                "Token endpoint response did not contain an access token",
                during_token_exchange=True,
                http_status=response.status_code,
                raw_body=body,
            )

        margin = min(self._expiry_margin, lifetime / 2)
        if margin < self._expiry_margin:
            logging.warning(
                "Token lifetime of %ss is shorter than twice the expiry margin; using %ss",
                lifetime,
                margin,
            )
        logging.info("Access token acquired, valid for %ss", int(lifetime))
        return Token(
            value=value,
            expires_at=issued_at + lifetime,
            refresh_at=issued_at + lifetime - margin,
        )
