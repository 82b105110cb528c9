"""Changes: atomic record updates applied to a managed zone."""

from __future__ import annotations

from adapters.cloud_dns.base import ProjectScopedApi, segment
from adapters.wire import encode
from core.domain.models import Change
from core.domain.options import ListOptions
from core.domain.pagination import Page, PagedIterator, paginate


class ChangeApi(ProjectScopedApi):
    def _changes(self, zone: str) -> str:
        return f"{self._root}/managedZones/{segment(zone)}/changes"

    def create_in_managed_zone(self, zone: str, change: Change) -> Change:
        """Submit `change`; the returned value carries the server id and status."""

        return self._post(self._changes(zone), encode(change, self._adapters), Change)

    def get_in_managed_zone(self, zone: str, change_id: int | str) -> Change | None:
        return self._get_one(f"{self._changes(zone)}/{segment(str(change_id))}", Change)

    def list_at_marker_in_managed_zone(
        self,
        zone: str,
        marker: str | None,
        options: ListOptions | None = None,
    ) -> Page[Change]:
        return self._list_page(self._changes(zone), Change, marker, options)

    def list_in_managed_zone(self, zone: str, options: ListOptions | None = None) -> PagedIterator[Change]:
        """Iterate every change of `zone`; a missing zone yields nothing."""

        first = self.list_at_marker_in_managed_zone(zone, None, options)
        return paginate(first, lambda marker: self.list_at_marker_in_managed_zone(zone, marker, options))
