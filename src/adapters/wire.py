"""Wire adapter: JSON payloads <-> domain values.

Decoding is two-stage:

1. `model_validate` the payload into a pydantic *mirror* model whose fields
   match the wire names exactly (aliases, optional fields nullable);
2. copy the mirror, field for field, into the domain builder and `build()`.

The mirror models are plain structural copies: no field is renamed in
meaning, defaulted or transformed beyond type coercion.

The adapters are collected in an explicit registry (`default_adapters()`)
that callers pass to `decode` / `encode`; there is no global registry.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Generic, Mapping, Sequence, TypeVar

from pydantic import BaseModel, Field, field_serializer
from pydantic import ValidationError as PydanticValidationError
from pydantic.config import ConfigDict

from core.domain.kinds import ResourceKind
from core.domain.models import (
    Change,
    ManagedZone,
    Project,
    Quota,
    ResourceRecordSet,
)
from core.domain.pagination import Page
from core.errors import DecodeError

logger = logging.getLogger(__name__)

V = TypeVar("V")
M = TypeVar("M", bound=BaseModel)


class WireModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)


class QuotaWire(WireModel):
    kind: str | None = None
    managed_zones: int = Field(..., ge=0, alias="managedZones")
    rrsets_per_managed_zone: int = Field(..., ge=0, alias="rrsetsPerManagedZone")
    rrset_additions_per_change: int = Field(..., ge=0, alias="rrsetAdditionsPerChange")
    rrset_deletions_per_change: int = Field(..., ge=0, alias="rrsetDeletionsPerChange")
    total_rrdata_size_per_change: int = Field(..., ge=0, alias="totalRrdataSizePerChange")
    resource_records_per_rrset: int = Field(..., ge=0, alias="resourceRecordsPerRrset")


class ProjectWire(WireModel):
    kind: str | None = None
    id: str
    number: int
    quota: QuotaWire

    @field_serializer("number")
    def _int64_as_string(self, value: int) -> str:
        return str(value)


class ManagedZoneWire(WireModel):
    kind: str | None = None
    name: str
    dns_name: str = Field(..., alias="dnsName")
    description: str | None = None
    id: int
    name_servers: list[str] | None = Field(default=None, alias="nameServers")
    creation_time: datetime = Field(..., alias="creationTime")

    @field_serializer("id")
    def _int64_as_string(self, value: int) -> str:
        return str(value)


class ManagedZoneCreateWire(WireModel):
    name: str
    dns_name: str = Field(..., alias="dnsName")
    description: str | None = None


class ResourceRecordSetWire(WireModel):
    kind: str | None = None
    name: str
    type: str
    ttl: int | None = None
    rrdatas: list[str] | None = None


class ChangeWire(WireModel):
    kind: str | None = None
    additions: list[ResourceRecordSetWire] | None = None
    deletions: list[ResourceRecordSetWire] | None = None
    start_time: datetime | None = Field(default=None, alias="startTime")
    id: int | None = None
    status: str | None = None

    @field_serializer("id")
    def _int64_as_string(self, value: int | None) -> str | None:
        return None if value is None else str(value)


def _quota_from_wire(w: QuotaWire) -> Quota:
    return (
        Quota.builder()
        .managed_zones(w.managed_zones)
        .rrsets_per_managed_zone(w.rrsets_per_managed_zone)
        .rrset_additions_per_change(w.rrset_additions_per_change)
        .rrset_deletions_per_change(w.rrset_deletions_per_change)
        .total_rrdata_size_per_change(w.total_rrdata_size_per_change)
        .resource_records_per_rrset(w.resource_records_per_rrset)
        .build()
    )


def _quota_to_wire(q: Quota) -> QuotaWire:
    return QuotaWire(
        managed_zones=q.managed_zones,
        rrsets_per_managed_zone=q.rrsets_per_managed_zone,
        rrset_additions_per_change=q.rrset_additions_per_change,
        rrset_deletions_per_change=q.rrset_deletions_per_change,
        total_rrdata_size_per_change=q.total_rrdata_size_per_change,
        resource_records_per_rrset=q.resource_records_per_rrset,
    )


def _project_from_wire(w: ProjectWire) -> Project:
    return Project.builder().id(w.id).number(w.number).quota(_quota_from_wire(w.quota)).build()


def _project_to_wire(p: Project) -> ProjectWire:
    return ProjectWire(kind=p.kind.wire_value, id=p.id, number=p.number, quota=_quota_to_wire(p.quota))


def _zone_from_wire(w: ManagedZoneWire) -> ManagedZone:
    return (
        ManagedZone.builder()
        .name(w.name)
        .dns_name(w.dns_name)
        .description(w.description)
        .id(w.id)
        .name_servers(w.name_servers)
        .creation_time(w.creation_time)
        .build()
    )


def _zone_to_wire(z: ManagedZone) -> ManagedZoneWire:
    return ManagedZoneWire(
        kind=z.kind.wire_value,
        name=z.name,
        dns_name=z.dns_name,
        description=z.description,
        id=z.id,
        name_servers=sorted(z.name_servers),
        creation_time=z.creation_time,
    )


def _rrset_from_wire(w: ResourceRecordSetWire) -> ResourceRecordSet:
    return ResourceRecordSet.builder().name(w.name).type(w.type).ttl(w.ttl).rrdatas(w.rrdatas).build()


def _rrset_to_wire(r: ResourceRecordSet) -> ResourceRecordSetWire:
    return ResourceRecordSetWire(
        kind=r.kind.wire_value,
        name=r.name,
        type=r.type,
        ttl=r.ttl,
        rrdatas=list(r.rrdatas),
    )


def _change_from_wire(w: ChangeWire) -> Change:
    return (
        Change.builder()
        .additions(_rrset_from_wire(a) for a in w.additions or ())
        .deletions(_rrset_from_wire(d) for d in w.deletions or ())
        .start_time(w.start_time)
        .id(w.id)
        .status(w.status)
        .build()
    )


def _change_to_wire(c: Change) -> ChangeWire:
    return ChangeWire(
        kind=c.kind.wire_value,
        additions=[_rrset_to_wire(a) for a in c.additions],
        deletions=[_rrset_to_wire(d) for d in c.deletions],
        start_time=c.start_time,
        id=c.id,
        status=c.status,
    )


@dataclass(frozen=True)
class WireAdapter(Generic[V, M]):
    """Binds one domain type to its mirror model."""

    kind: ResourceKind | None
    mirror: type[M]
    to_value: Callable[[M], V]
    from_value: Callable[[V], M]


@dataclass(frozen=True)
class ListEnvelope:
    """Shape of a list response: its kind and the field holding the items."""

    kind: ResourceKind
    items_field: str


AdapterRegistry = Mapping[type, WireAdapter[Any, Any]]

LIST_ENVELOPES: Mapping[type, ListEnvelope] = {
    ManagedZone: ListEnvelope(ResourceKind.MANAGED_ZONES_LIST_RESPONSE, "managedZones"),
    Change: ListEnvelope(ResourceKind.CHANGES_LIST_RESPONSE, "changes"),
    ResourceRecordSet: ListEnvelope(ResourceKind.RESOURCE_RECORD_SETS_LIST_RESPONSE, "rrsets"),
}


def default_adapters() -> dict[type, WireAdapter[Any, Any]]:
    """Build the registry of adapters for every resource type."""

    return {
        Quota: WireAdapter(None, QuotaWire, _quota_from_wire, _quota_to_wire),
        Project: WireAdapter(ResourceKind.PROJECT, ProjectWire, _project_from_wire, _project_to_wire),
        ManagedZone: WireAdapter(ResourceKind.MANAGED_ZONE, ManagedZoneWire, _zone_from_wire, _zone_to_wire),
        ResourceRecordSet: WireAdapter(
            ResourceKind.RESOURCE_RECORD_SET, ResourceRecordSetWire, _rrset_from_wire, _rrset_to_wire
        ),
        Change: WireAdapter(ResourceKind.CHANGE, ChangeWire, _change_from_wire, _change_to_wire),
    }


def _adapter_for(target: type[V], adapters: AdapterRegistry) -> WireAdapter[V, Any]:
    try:
        return adapters[target]
    except KeyError:
        raise DecodeError(f"no wire adapter registered for {target.__name__}") from None


def _load(payload: bytes | str | Mapping[str, Any]) -> Any:
    if isinstance(payload, (bytes, bytearray, str)):
        try:
            return json.loads(payload)
        except ValueError as exc:
            raise DecodeError(f"payload is not valid JSON: {exc}") from exc
    return payload


def _check_kind(data: Mapping[str, Any], expected: ResourceKind | None) -> None:
    if expected is None or "kind" not in data or data["kind"] is None:
        return
    actual = ResourceKind.from_wire(data["kind"])
    if actual is not expected:
        raise DecodeError(
            f"expected kind {expected.wire_value!r}, got {data['kind']!r}",
            kind=expected,
        )


def _decode_error(exc: PydanticValidationError, label: str, kind: ResourceKind | None) -> DecodeError:
    first = exc.errors()[0]
    field = ".".join(str(part) for part in first.get("loc", ())) or None
    if first.get("type") == "missing":
        message = f"{label} payload is missing required field {field!r}"
    else:
        message = f"{label} payload has invalid field {field!r}: {first.get('msg')}"
    return DecodeError(message, kind=kind, field=field)


def decode_mapping(data: Any, target: type[V], adapters: AdapterRegistry) -> V:
    """Decode an already parsed JSON object into a `target` value."""

    adapter = _adapter_for(target, adapters)
    label = adapter.kind.value if adapter.kind else target.__name__
    if not isinstance(data, Mapping):
        raise DecodeError(f"{label} payload must be a JSON object", kind=adapter.kind)
    _check_kind(data, adapter.kind)
    try:
        mirror = adapter.mirror.model_validate(data)
    except PydanticValidationError as exc:
        logger.debug("Rejected %s payload: %s", label, exc)
        raise _decode_error(exc, label, adapter.kind) from exc
    return adapter.to_value(mirror)


def decode(payload: bytes | str | Mapping[str, Any], target: type[V], adapters: AdapterRegistry) -> V:
    """Decode one wire record into a `target` domain value."""

    return decode_mapping(_load(payload), target, adapters)


def encode_mapping(value: Any, adapters: AdapterRegistry) -> dict[str, Any]:
    adapter = _adapter_for(type(value), adapters)
    return adapter.from_value(value).model_dump(mode="json", by_alias=True, exclude_none=True)


def encode(value: Any, adapters: AdapterRegistry) -> bytes:
    """Encode a domain value as its wire JSON."""

    return json.dumps(encode_mapping(value, adapters), ensure_ascii=False, sort_keys=True).encode("utf-8")


def decode_page(
    payload: bytes | str | Mapping[str, Any],
    item_type: type[V],
    adapters: AdapterRegistry,
) -> Page[V]:
    """Decode a list response envelope ``{<items>: [...], nextPageToken?}``."""

    envelope = LIST_ENVELOPES.get(item_type)
    if envelope is None:
        raise DecodeError(f"{item_type.__name__} has no list response")
    data = _load(payload)
    if not isinstance(data, Mapping):
        raise DecodeError(f"{envelope.kind.value} payload must be a JSON object", kind=envelope.kind)
    _check_kind(data, envelope.kind)

    raw_items = data.get(envelope.items_field) or []
    if not isinstance(raw_items, list):
        raise DecodeError(
            f"{envelope.kind.value} field {envelope.items_field!r} must be a list",
            kind=envelope.kind,
            field=envelope.items_field,
        )
    marker = data.get("nextPageToken")
    if marker is not None and not isinstance(marker, str):
        raise DecodeError(
            f"{envelope.kind.value} field 'nextPageToken' must be a string",
            kind=envelope.kind,
            field="nextPageToken",
        )
    items = tuple(decode_mapping(raw, item_type, adapters) for raw in raw_items)
    return Page(items=items, next_marker=marker)


def encode_page(page: Page[Any], item_type: type, adapters: AdapterRegistry) -> bytes:
    """Encode a page as its list response envelope."""

    envelope = LIST_ENVELOPES[item_type]
    data: dict[str, Any] = {
        "kind": envelope.kind.wire_value,
        envelope.items_field: [encode_mapping(item, adapters) for item in page.items],
    }
    if page.next_marker is not None:
        data["nextPageToken"] = page.next_marker
    return json.dumps(data, ensure_ascii=False, sort_keys=True).encode("utf-8")


def encode_many(values: Sequence[Any], adapters: AdapterRegistry) -> list[dict[str, Any]]:
    return [encode_mapping(value, adapters) for value in values]


def encode_zone_create(name: str, dns_name: str, description: str | None = None) -> bytes:
    """Body of a zone insert; the server fills in id, name servers and creation time."""

    body = ManagedZoneCreateWire(name=name, dns_name=dns_name, description=description)
    return json.dumps(
        body.model_dump(mode="json", by_alias=True, exclude_none=True),
        ensure_ascii=False,
        sort_keys=True,
    ).encode("utf-8")
