"""Projects: read-only view of a project and its quota."""

from __future__ import annotations

from adapters.cloud_dns.base import segment
from adapters.wire import AdapterRegistry, decode
from core.domain.models import Project
from core.errors import NotFoundError
from core.interfaces.transport import Transport


class ProjectApi:
    def __init__(self, transport: Transport, adapters: AdapterRegistry) -> None:
        self._transport = transport
        self._adapters = adapters

    def get(self, project: str) -> Project | None:
        """Return the project, or None when it does not exist."""

        try:
            body = self._transport.fetch(f"/projects/{segment(project)}")
        except NotFoundError:
            return None
        return decode(body, Project, self._adapters)
