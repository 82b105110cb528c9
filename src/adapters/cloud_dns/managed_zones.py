"""Managed zones: create, get, delete and list."""

from __future__ import annotations

from adapters.cloud_dns.base import ProjectScopedApi, segment
from adapters.wire import encode_zone_create
from core.domain.models import ManagedZone
from core.domain.options import ListOptions
from core.domain.pagination import Page, PagedIterator, paginate
from core.errors import NotFoundError


class ManagedZoneApi(ProjectScopedApi):
    """Zones of one project."""

    @property
    def _zones(self) -> str:
        return f"{self._root}/managedZones"

    def create(self, name: str, dns_name: str, description: str | None = None) -> ManagedZone:
        """Create a zone; the server fills in id, name servers and creation time."""

        return self._post(self._zones, encode_zone_create(name, dns_name, description), ManagedZone)

    def get(self, name: str) -> ManagedZone | None:
        return self._get_one(f"{self._zones}/{segment(name)}", ManagedZone)

    def delete(self, name: str) -> None:
        """Delete a zone; deleting a zone that does not exist is a no-op."""

        try:
            self._transport.send("DELETE", f"{self._zones}/{segment(name)}")
        except NotFoundError:
            return None

    def list_first_page(self, options: ListOptions | None = None) -> Page[ManagedZone]:
        return self.list_at_marker(None, options)

    def list_at_marker(self, marker: str | None, options: ListOptions | None = None) -> Page[ManagedZone]:
        """Fetch one page of zones starting at `marker` (None for the first page)."""

        return self._list_page(self._zones, ManagedZone, marker, options)

    def list(self, options: ListOptions | None = None) -> PagedIterator[ManagedZone]:
        """Iterate every zone of the project, fetching pages lazily."""

        first = self.list_first_page(options)
        return paginate(first, lambda marker: self.list_at_marker(marker, options))
