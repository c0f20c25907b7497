"""
The request-execution engine every API operation goes through.

``RequestExecutor.invoke`` resolves the URL from an endpoint descriptor,
attaches a bearer token, sends exactly one HTTP request and turns the outcome
into either a decoded response or an :class:`EnzonaError`.
"""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping, Optional
from urllib.parse import quote, urlencode

import requests

from . import codec
from .auth import TokenProvider
from .endpoints import EndpointDescriptor
from .errors import (
    AuthError,
    CancelledError,
    DecodeError,
    NetworkError,
    TimeoutError,
    classify,
    is_timeout,
)

__all__ = [
    "API_BASE_URL",
    "Cancellation",
    "RequestContext",
    "RequestExecutor",
]

API_BASE_URL = "https://api.enzona.net/"

_CHUNK_SIZE = 8192


class Cancellation:
    """
    Handle a caller can use to abandon an in-flight ``invoke`` from another
    thread. ``cancel()`` closes the response being read, if any.
    """

    def __init__(self) -> None:
        self._event = threading.Event()
        self._lock = threading.Lock()
        self._response: Optional[requests.Response] = None

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def cancel(self) -> None:
        self._event.set()
        with self._lock:
            response = self._response
        if response is not None:
            response.close()

    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise CancelledError("Request was cancelled")

    def _attach(self, response: Optional[requests.Response]) -> None:
        with self._lock:
            self._response = response


@dataclass(frozen=True)
class RequestContext:
    descriptor: EndpointDescriptor
    path_params: Mapping[str, Any] = field(default_factory=dict)
    query_params: Mapping[str, Any] = field(default_factory=dict)
    body: Any = None

    def path(self) -> str:
        values = {}
        for name in self.descriptor.path_params:
            value = self.path_params.get(name)
            if value is None or value == "":
                raise ValueError(
                    f"Missing path parameter '{name}' for {self.descriptor.name}"
                )
            values[name] = quote(str(value), safe="")
        return self.descriptor.path_template.format(**values)

    def query_string(self) -> str:
        unknown = set(self.query_params) - set(self.descriptor.query_params)
        if unknown:
            raise ValueError(
                f"Unsupported query parameters for {self.descriptor.name}: "
                + ", ".join(sorted(unknown))
            )
        pairs = [
            (name, _query_value(self.query_params[name]))
            for name in self.descriptor.query_params
            if self.query_params.get(name) is not None
        ]
        return urlencode(pairs)

    def url(self, base_url: str) -> str:
        url = base_url.rstrip("/") + "/" + self.path()
        query = self.query_string()
        return f"{url}?{query}" if query else url


def _query_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class RequestExecutor:
    """
    ``timeout`` bounds each socket read (through ``requests``) and the whole
    body transfer, which is checked between chunks.
    """

    def __init__(
        self,
        session: requests.Session,
        tokens: TokenProvider,
        *,
        timeout: float = 30.0,
        base_url: str = API_BASE_URL,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._session = session
        self._tokens = tokens
        self._timeout = timeout
        self._base_url = base_url
        self._clock = clock

    def invoke(
        self,
        descriptor: EndpointDescriptor,
        path_params: Optional[Mapping[str, Any]] = None,
        query_params: Optional[Mapping[str, Any]] = None,
        body: Any = None,
        *,
        cancellation: Optional[Cancellation] = None,
    ) -> Any:
        context = RequestContext(
            descriptor=descriptor,
            path_params=dict(path_params or {}),
            query_params=dict(query_params or {}),
            body=body,
        )
        url = context.url(self._base_url)
        payload = self._encode_body(context)

        if cancellation is not None:
            cancellation.raise_if_cancelled()

        token = self._tokens.get_token()
        headers = {
            "Authorization": f"Bearer {token.value}",
            "Content-Type": "application/json",
            "Accept": "application/json",
        }

        if cancellation is not None:
            cancellation.raise_if_cancelled()

        logging.debug("%s %s", descriptor.http_method, url)
        status, text, response_headers = self._send(
            descriptor.http_method, url, headers, payload, cancellation
        )
        logging.debug("%s %s -> HTTP %s", descriptor.http_method, url, status)

        error = classify(status, text, response_headers)
        if error is not None:
            logging.warning(
                "%s failed with HTTP %s (%s)", descriptor.name, status, error.kind.value
            )
            if isinstance(error, AuthError) and status == 401:
                self._tokens.invalidate(token)
            raise error

        try:
            return codec.loads(text, descriptor.response_shape)
        except (ValueError, TypeError) as exc:
            raise DecodeError(
                f"Could not decode response of {descriptor.name}: {exc}",
                http_status=status,
                raw_body=text,
                cause=exc,
            ) from exc

    def _encode_body(self, context: RequestContext) -> Optional[str]:
        if not context.descriptor.has_body:
            return None
        if context.body is None:
            raise ValueError(f"{context.descriptor.name} requires a request body")
        return codec.dumps(context.body)

    def _send(
        self,
        method: str,
        url: str,
        headers: Mapping[str, str],
        payload: Optional[str],
        cancellation: Optional[Cancellation],
    ):
        response = None
        deadline = self._clock() + self._timeout
        try:
            response = self._session.request(
                method,
                url,
                data=payload.encode("utf-8") if payload is not None else None,
                headers=dict(headers),
                timeout=self._timeout,
                stream=True,
            )
            if cancellation is not None:
                cancellation._attach(response)
                cancellation.raise_if_cancelled()
            chunks = []
            for chunk in response.iter_content(chunk_size=_CHUNK_SIZE):
                if cancellation is not None:
                    cancellation.raise_if_cancelled()
                if self._clock() > deadline:
                    raise TimeoutError(
                        f"{method} {url} did not complete within {self._timeout}s"
                    )
                chunks.append(chunk)
            if cancellation is not None:
                cancellation.raise_if_cancelled()
            text = b"".join(chunks).decode(response.encoding or "utf-8", errors="replace")
            return response.status_code, text, response.headers
        except (CancelledError, TimeoutError):
            raise
        except Exception as exc:
            if cancellation is not None and cancellation.cancelled:
                raise CancelledError("Request was cancelled", cause=exc) from exc
            if is_timeout(exc):
                raise TimeoutError(
                    f"{method} {url} timed out after {self._timeout}s", cause=exc
                ) from exc
            if isinstance(exc, requests.RequestException):
                raise NetworkError(f"{method} {url} failed: {exc}", cause=exc) from exc
            raise
        finally:
            if cancellation is not None:
                cancellation._attach(None)
            if response is not None:
                response.close()
