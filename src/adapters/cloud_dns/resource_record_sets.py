"""Resource record sets of a managed zone (read-only; writes go through changes)."""

from __future__ import annotations

from adapters.cloud_dns.base import ProjectScopedApi, segment
from core.domain.models import ResourceRecordSet
from core.domain.options import ListOptions
from core.domain.pagination import Page, PagedIterator, paginate


class ResourceRecordSetApi(ProjectScopedApi):
    def _rrsets(self, zone: str) -> str:
        return f"{self._root}/managedZones/{segment(zone)}/rrsets"

    def list_at_marker_in_managed_zone(
        self,
        zone: str,
        marker: str | None,
        options: ListOptions | None = None,
    ) -> Page[ResourceRecordSet]:
        return self._list_page(self._rrsets(zone), ResourceRecordSet, marker, options)

    def list_in_managed_zone(
        self,
        zone: str,
        options: ListOptions | None = None,
    ) -> PagedIterator[ResourceRecordSet]:
        first = self.list_at_marker_in_managed_zone(zone, None, options)
        return paginate(first, lambda marker: self.list_at_marker_in_managed_zone(zone, marker, options))
