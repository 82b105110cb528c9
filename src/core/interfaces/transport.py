"""Transport contract consumed by the API bindings.

Why a Protocol:
- The bindings only need "send this request, give me the body bytes".
- Tests plug in an httpx mock transport or a hand-written fake without
  touching the bindings.
"""

from __future__ import annotations

from typing import Mapping, Protocol, runtime_checkable


@runtime_checkable
class Transport(Protocol):
    """Minimal request/response contract.

    Rules:
    - Paths are relative to the API root (``/projects/{project}/...``).
    - A 404 raises `core.errors.NotFoundError`; any other failure raises
      `core.errors.FetchError`.
    - Credentials are the transport's business; callers never see them.
    """

    def fetch(self, path: str, params: Mapping[str, str] | None = None) -> bytes:
        """GET `path` and return the raw response body."""

        ...

    def send(self, method: str, path: str, body: bytes | None = None) -> bytes:
        """Issue a write (POST/DELETE) and return the raw response body."""

        ...

    def close(self) -> None:
        ...
