"""httpx-backed transport.

Why a wrapper:
- Standardizes timeouts, headers, retries, auth and logging for every call.
- Maps HTTP failures onto the client's error taxonomy in one place.
- Easy to test: pass an `httpx.MockTransport` through `transport=`.
"""

from __future__ import annotations

import logging
from typing import Generator, Mapping

import httpx

from core.config import AppSettings
from core.errors import FetchError, NotFoundError

logger = logging.getLogger(__name__)


class BearerTokenAuth(httpx.Auth):
    """Adds ``Authorization: Bearer <token>`` to each request."""

    def __init__(self, token: str) -> None:
        self._token = token

    def auth_flow(self, request: httpx.Request) -> Generator[httpx.Request, httpx.Response, None]:
        request.headers["Authorization"] = f"Bearer {self._token}"
        yield request


def build_client(
    settings: AppSettings | None = None,
    *,
    extra_headers: dict[str, str] | None = None,
    transport: httpx.BaseTransport | None = None,
) -> httpx.Client:
    """Create an `httpx.Client` with safe defaults.

    Why a builder:
    - Centralizes timeouts, headers and auth so every binding behaves the same.
    - `transport` lets tests route requests to a mock.
    """

    settings = settings or AppSettings()
    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        "Accept": "application/json",
    }
    if extra_headers:
        headers.update(extra_headers)
    auth = BearerTokenAuth(settings.access_token) if settings.access_token else None
    return httpx.Client(
        base_url=settings.api_base_url.rstrip("/"),
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        headers=headers,
        auth=auth,
        transport=transport or httpx.HTTPTransport(retries=settings.http_retries),
    )


class HttpTransport:
    """`core.interfaces.transport.Transport` over a synchronous httpx client."""

    def __init__(self, client: httpx.Client) -> None:
        self._client = client

    @classmethod
    def from_settings(
        cls,
        settings: AppSettings | None = None,
        *,
        transport: httpx.BaseTransport | None = None,
    ) -> "HttpTransport":
        return cls(build_client(settings, transport=transport))

    def fetch(self, path: str, params: Mapping[str, str] | None = None) -> bytes:
        return self._request("GET", path, params=dict(params or {}))

    def send(self, method: str, path: str, body: bytes | None = None) -> bytes:
        headers = {"Content-Type": "application/json"} if body is not None else None
        return self._request(method, path, content=body, headers=headers)

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "HttpTransport":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _request(self, method: str, path: str, **kwargs: object) -> bytes:
        logger.debug("%s %s params=%s", method, path, kwargs.get("params"))
        try:
            response = self._client.request(method, path, **kwargs)  # type: ignore[arg-type]
        except httpx.HTTPError as exc:
            raise FetchError(f"{method} {path} failed: {exc}", url=path) from exc

        if response.status_code == 404:
            raise NotFoundError(
                f"{method} {path}: not found",
                status_code=404,
                url=str(response.url),
            )
        if response.is_error:
            logger.warning("%s %s returned HTTP %s", method, path, response.status_code)
            raise FetchError(
                f"{method} {path} returned HTTP {response.status_code}: {_error_message(response)}",
                status_code=response.status_code,
                url=str(response.url),
            )
        return response.content


def _error_message(response: httpx.Response) -> str:
    """Best-effort extraction of the API's ``error.message``."""

    try:
        data = response.json()
    except ValueError:
        return response.text[:200]
    if isinstance(data, dict):
        error = data.get("error")
        if isinstance(error, dict) and isinstance(error.get("message"), str):
            return error["message"]
    return response.text[:200]
