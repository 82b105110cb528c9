"""Cloud DNS API bindings.

Why a package:
- One module per API feature (projects, zones, changes, record sets).
- `CloudDnsApi` ties them to a single transport and adapter registry.
"""

from __future__ import annotations

from typing import Any

from adapters.cloud_dns.changes import ChangeApi
from adapters.cloud_dns.managed_zones import ManagedZoneApi
from adapters.cloud_dns.projects import ProjectApi
from adapters.cloud_dns.resource_record_sets import ResourceRecordSetApi
from adapters.http_client import HttpTransport
from adapters.wire import AdapterRegistry, default_adapters
from core.config import AppSettings
from core.interfaces.transport import Transport


class CloudDnsApi:
    """Entry point: hands out feature APIs bound to a project."""

    def __init__(self, transport: Transport, adapters: AdapterRegistry | None = None) -> None:
        self._transport = transport
        self.adapters: AdapterRegistry = adapters if adapters is not None else default_adapters()

    def projects(self) -> ProjectApi:
        return ProjectApi(self._transport, self.adapters)

    def managed_zones(self, project: str) -> ManagedZoneApi:
        return ManagedZoneApi(self._transport, self.adapters, project)

    def changes(self, project: str) -> ChangeApi:
        return ChangeApi(self._transport, self.adapters, project)

    def resource_record_sets(self, project: str) -> ResourceRecordSetApi:
        return ResourceRecordSetApi(self._transport, self.adapters, project)

    def close(self) -> None:
        self._transport.close()

    def __enter__(self) -> "CloudDnsApi":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()


def build_api(settings: AppSettings | None = None, **transport_kwargs: Any) -> CloudDnsApi:
    """Wire the httpx transport and the default adapters together."""

    return CloudDnsApi(HttpTransport.from_settings(settings, **transport_kwargs))


__all__ = [
    "ChangeApi",
    "CloudDnsApi",
    "ManagedZoneApi",
    "ProjectApi",
    "ResourceRecordSetApi",
    "build_api",
]
