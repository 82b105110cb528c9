"""Error taxonomy for the Cloud DNS client.

Rules:
- Everything raised by the core derives from `CloudDnsError`.
- Nothing is swallowed inside the core; the API layer only translates
  `NotFoundError` into an absent value (get) or an empty page (list).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from core.domain.kinds import ResourceKind


class CloudDnsError(Exception):
    """Base class for every error raised by this package."""


class ValidationError(CloudDnsError, ValueError):
    """A builder or option setter rejected its input."""

    def __init__(self, field: str, message: str | None = None) -> None:
        self.field = field
        super().__init__(message or f"missing required field '{field}'")


class DecodeError(CloudDnsError, ValueError):
    """A wire payload does not match the shape expected for its kind."""

    def __init__(
        self,
        message: str,
        *,
        kind: ResourceKind | None = None,
        field: str | None = None,
    ) -> None:
        self.kind = kind
        self.field = field
        super().__init__(message)


class FetchError(CloudDnsError):
    """A request to the API failed (network, auth or server error)."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        url: str | None = None,
    ) -> None:
        self.status_code = status_code
        self.url = url
        super().__init__(message)


class NotFoundError(FetchError):
    """The server answered 404 for the requested resource or its parent."""


class MarkerCycleError(FetchError):
    """The server handed back a marker that was already followed."""

    def __init__(self, marker: str) -> None:
        self.marker = marker
        super().__init__(f"page marker {marker!r} was already followed")
