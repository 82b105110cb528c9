"""Shared plumbing of the per-feature API bindings."""

from __future__ import annotations

import logging
from typing import TypeVar
from urllib.parse import quote

from adapters.wire import AdapterRegistry, decode, decode_page
from core.domain.options import ListOptions
from core.domain.pagination import Page
from core.errors import NotFoundError
from core.interfaces.transport import Transport

logger = logging.getLogger(__name__)

V = TypeVar("V")

PAGE_TOKEN_PARAM = "pageToken"


def segment(value: str) -> str:
    """Encode one path segment."""

    return quote(str(value), safe="")


class ProjectScopedApi:
    """Base for bindings living under ``/projects/{project}``."""

    def __init__(self, transport: Transport, adapters: AdapterRegistry, project: str) -> None:
        self._transport = transport
        self._adapters = adapters
        self.project = project

    @property
    def _root(self) -> str:
        return f"/projects/{segment(self.project)}"

    def _get_one(self, path: str, target: type[V]) -> V | None:
        try:
            body = self._transport.fetch(path)
        except NotFoundError:
            logger.debug("GET %s: not found", path)
            return None
        return decode(body, target, self._adapters)

    def _list_page(
        self,
        path: str,
        item_type: type[V],
        marker: str | None,
        options: ListOptions | None,
    ) -> Page[V]:
        params: dict[str, str] = dict(options.query_params) if options else {}
        if marker is not None:
            params[PAGE_TOKEN_PARAM] = marker
        try:
            body = self._transport.fetch(path, params)
        except NotFoundError:
            logger.debug("List %s: parent not found, returning an empty page", path)
            return Page.empty()
        return decode_page(body, item_type, self._adapters)

    def _post(self, path: str, body: bytes, target: type[V]) -> V:
        return decode(self._transport.send("POST", path, body), target, self._adapters)

