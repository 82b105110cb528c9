"""Domain value types for Cloud DNS.

All values are frozen and built through a builder:

    zone = (
        ManagedZone.builder()
        .name("example")
        .id(42)
        .dns_name("example.com.")
        .creation_time(now)
        .build()
    )

Rules:
- `build()` validates required fields and raises `ValidationError` naming the
  first missing one.
- Collections handed to a builder are copied into immutable containers at
  `build()` time; `None` becomes an empty collection.
- `to_builder()` seeds a new builder with the value's fields; collections are
  copied into the builder's own mutable set or list.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Iterable

from core.domain.kinds import ResourceKind
from core.domain.resource import Identity, Resource, ResourceBuilder, require
from core.errors import ValidationError

CHANGE_STATUSES = frozenset({"pending", "done"})


@dataclass(frozen=True, kw_only=True)
class Quota:
    """Per-project limits reported by the server."""

    managed_zones: int
    rrsets_per_managed_zone: int
    rrset_additions_per_change: int
    rrset_deletions_per_change: int
    total_rrdata_size_per_change: int
    resource_records_per_rrset: int

    def __post_init__(self) -> None:
        for name in _QUOTA_FIELDS:
            value = require(getattr(self, name), name)
            if value < 0:
                raise ValidationError(name, f"'{name}' must be non-negative, got {value}")

    @classmethod
    def builder(cls) -> "QuotaBuilder":
        return QuotaBuilder()

    def to_builder(self) -> "QuotaBuilder":
        return QuotaBuilder().from_quota(self)

    def __str__(self) -> str:
        parts = ", ".join(f"{name}={getattr(self, name)}" for name in _QUOTA_FIELDS)
        return f"Quota{{{parts}}}"

    __repr__ = __str__


_QUOTA_FIELDS = (
    "managed_zones",
    "rrsets_per_managed_zone",
    "rrset_additions_per_change",
    "rrset_deletions_per_change",
    "total_rrdata_size_per_change",
    "resource_records_per_rrset",
)


class QuotaBuilder:
    def __init__(self) -> None:
        self._values: dict[str, int | None] = dict.fromkeys(_QUOTA_FIELDS)

    def managed_zones(self, value: int) -> "QuotaBuilder":
        self._values["managed_zones"] = value
        return self

    def rrsets_per_managed_zone(self, value: int) -> "QuotaBuilder":
        self._values["rrsets_per_managed_zone"] = value
        return self

    def rrset_additions_per_change(self, value: int) -> "QuotaBuilder":
        self._values["rrset_additions_per_change"] = value
        return self

    def rrset_deletions_per_change(self, value: int) -> "QuotaBuilder":
        self._values["rrset_deletions_per_change"] = value
        return self

    def total_rrdata_size_per_change(self, value: int) -> "QuotaBuilder":
        self._values["total_rrdata_size_per_change"] = value
        return self

    def resource_records_per_rrset(self, value: int) -> "QuotaBuilder":
        self._values["resource_records_per_rrset"] = value
        return self

    def from_quota(self, quota: Quota) -> "QuotaBuilder":
        for name in _QUOTA_FIELDS:
            self._values[name] = getattr(quota, name)
        return self

    def build(self) -> Quota:
        return Quota(**self._values)  # type: ignore[arg-type]


@dataclass(frozen=True, eq=False, repr=False, kw_only=True)
class Project(Resource):
    """A project as seen by the DNS service; read-only server state."""

    quota: Quota

    def __post_init__(self) -> None:
        require(self.identity.numeric_id, "number")
        require(self.identity.string_id, "id")
        require(self.quota, "quota")

    @property
    def id(self) -> str:
        """User-assigned project id."""

        return self._string_id  # type: ignore[return-value]

    @property
    def number(self) -> int:
        """Server-assigned project number."""

        return self._numeric_id  # type: ignore[return-value]

    def _string_fields(self) -> Iterable[tuple[str, Any]]:
        yield from super()._string_fields()
        yield "id", self.id
        yield "number", self.number
        yield "quota", self.quota

    @classmethod
    def builder(cls) -> "ProjectBuilder":
        return ProjectBuilder()

    def to_builder(self) -> "ProjectBuilder":
        return ProjectBuilder().from_project(self)


class ProjectBuilder(ResourceBuilder[Project]):
    kind = ResourceKind.PROJECT

    def __init__(self) -> None:
        super().__init__()
        self._quota: Quota | None = None

    def number(self, number: int | None) -> "ProjectBuilder":
        self._numeric_id = number
        return self

    def id(self, project_id: str | None) -> "ProjectBuilder":
        self._string_id = project_id
        return self

    def quota(self, quota: Quota | None) -> "ProjectBuilder":
        self._quota = quota
        return self

    def from_project(self, project: Project) -> "ProjectBuilder":
        self._from_resource(project)
        self._quota = project.quota
        return self

    def build(self) -> Project:
        return Project(identity=self._identity(), quota=self._quota)  # type: ignore[arg-type]


@dataclass(frozen=True, eq=False, repr=False, kw_only=True)
class ManagedZone(Resource):
    """A zone hosted by the service.

    ``dns_name`` is carried as given; the trailing period is the caller's
    responsibility. ``name_servers`` is a set, its order is not meaningful.
    """

    dns_name: str
    creation_time: datetime
    description: str | None = None
    name_servers: frozenset[str] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        require(self.identity.string_id, "name")
        require(self.dns_name, "dns_name")
        require(self.identity.numeric_id, "id")
        require(self.creation_time, "creation_time")
        object.__setattr__(self, "name_servers", frozenset(self.name_servers or ()))

    @property
    def name(self) -> str:
        return self._string_id  # type: ignore[return-value]

    @property
    def id(self) -> int:
        return self._numeric_id  # type: ignore[return-value]

    def _string_fields(self) -> Iterable[tuple[str, Any]]:
        yield from super()._string_fields()
        yield "id", self.id
        yield "name", self.name
        yield "dnsName", self.dns_name
        yield "description", self.description
        yield "nameServers", self.name_servers
        yield "creationTime", self.creation_time.isoformat()

    @classmethod
    def builder(cls) -> "ManagedZoneBuilder":
        return ManagedZoneBuilder()

    def to_builder(self) -> "ManagedZoneBuilder":
        return ManagedZoneBuilder().from_managed_zone(self)


class ManagedZoneBuilder(ResourceBuilder[ManagedZone]):
    kind = ResourceKind.MANAGED_ZONE

    def __init__(self) -> None:
        super().__init__()
        self._dns_name: str | None = None
        self._description: str | None = None
        self._name_servers: set[str] = set()
        self._creation_time: datetime | None = None

    def id(self, zone_id: int | None) -> "ManagedZoneBuilder":
        self._numeric_id = zone_id
        return self

    def name(self, name: str | None) -> "ManagedZoneBuilder":
        self._string_id = name
        return self

    def dns_name(self, dns_name: str | None) -> "ManagedZoneBuilder":
        self._dns_name = dns_name
        return self

    def description(self, description: str | None) -> "ManagedZoneBuilder":
        self._description = description
        return self

    def add_name_server(self, name_server: str) -> "ManagedZoneBuilder":
        self._name_servers.add(require(name_server, "name_servers"))
        return self

    def name_servers(self, name_servers: Iterable[str] | None) -> "ManagedZoneBuilder":
        for server in name_servers or ():
            self.add_name_server(server)
        return self

    def creation_time(self, creation_time: datetime | None) -> "ManagedZoneBuilder":
        self._creation_time = creation_time
        return self

    def from_managed_zone(self, zone: ManagedZone) -> "ManagedZoneBuilder":
        self._from_resource(zone)
        self._dns_name = zone.dns_name
        self._description = zone.description
        self._name_servers = set(zone.name_servers)
        self._creation_time = zone.creation_time
        return self

    def build(self) -> ManagedZone:
        return ManagedZone(
            identity=self._identity(),
            dns_name=self._dns_name,  # type: ignore[arg-type]
            creation_time=self._creation_time,  # type: ignore[arg-type]
            description=self._description,
            name_servers=frozenset(self._name_servers),
        )


@dataclass(frozen=True, eq=False, repr=False, kw_only=True)
class ResourceRecordSet(Resource):
    """A named record set; ``rrdatas`` keeps the server's order."""

    type: str
    ttl: int | None = None
    rrdatas: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        require(self.identity.string_id, "name")
        require(self.type, "type")
        object.__setattr__(self, "rrdatas", tuple(self.rrdatas or ()))

    @property
    def name(self) -> str:
        return self._string_id  # type: ignore[return-value]

    def _string_fields(self) -> Iterable[tuple[str, Any]]:
        yield from super()._string_fields()
        yield "name", self.name
        yield "type", self.type
        yield "ttl", self.ttl
        yield "rrdatas", self.rrdatas

    @classmethod
    def builder(cls) -> "ResourceRecordSetBuilder":
        return ResourceRecordSetBuilder()

    def to_builder(self) -> "ResourceRecordSetBuilder":
        return ResourceRecordSetBuilder().from_resource_record_set(self)


class ResourceRecordSetBuilder(ResourceBuilder[ResourceRecordSet]):
    kind = ResourceKind.RESOURCE_RECORD_SET

    def __init__(self) -> None:
        super().__init__()
        self._type: str | None = None
        self._ttl: int | None = None
        self._rrdatas: list[str] = []

    def name(self, name: str | None) -> "ResourceRecordSetBuilder":
        self._string_id = name
        return self

    def type(self, record_type: str | None) -> "ResourceRecordSetBuilder":
        self._type = record_type
        return self

    def ttl(self, ttl: int | None) -> "ResourceRecordSetBuilder":
        self._ttl = ttl
        return self

    def add_rrdata(self, rrdata: str) -> "ResourceRecordSetBuilder":
        self._rrdatas.append(require(rrdata, "rrdatas"))
        return self

    def rrdatas(self, rrdatas: Iterable[str] | None) -> "ResourceRecordSetBuilder":
        for rrdata in rrdatas or ():
            self.add_rrdata(rrdata)
        return self

    def from_resource_record_set(self, rrset: ResourceRecordSet) -> "ResourceRecordSetBuilder":
        self._from_resource(rrset)
        self._type = rrset.type
        self._ttl = rrset.ttl
        self._rrdatas = list(rrset.rrdatas)
        return self

    def build(self) -> ResourceRecordSet:
        return ResourceRecordSet(
            identity=self._identity(),
            type=self._type,  # type: ignore[arg-type]
            ttl=self._ttl,
            rrdatas=tuple(self._rrdatas),
        )


@dataclass(frozen=True, eq=False, repr=False, kw_only=True)
class Change(Resource):
    """An atomic set of record additions and deletions applied to a zone.

    Deletions must match existing record sets exactly; the server enforces it.
    A change built client-side has no id, start time or status yet.
    """

    additions: tuple[ResourceRecordSet, ...] = ()
    deletions: tuple[ResourceRecordSet, ...] = ()
    start_time: datetime | None = None
    status: str | None = None

    def __post_init__(self) -> None:
        if self.status is not None and self.status not in CHANGE_STATUSES:
            raise ValidationError("status", f"status must be one of {sorted(CHANGE_STATUSES)}, got {self.status!r}")
        object.__setattr__(self, "additions", tuple(self.additions or ()))
        object.__setattr__(self, "deletions", tuple(self.deletions or ()))

    @property
    def id(self) -> int | None:
        return self._numeric_id

    @property
    def is_done(self) -> bool:
        return self.status == "done"

    def _string_fields(self) -> Iterable[tuple[str, Any]]:
        yield from super()._string_fields()
        yield "id", self.id
        yield "additions", self.additions
        yield "deletions", self.deletions
        yield "startTime", self.start_time.isoformat() if self.start_time else None
        yield "status", self.status

    @classmethod
    def builder(cls) -> "ChangeBuilder":
        return ChangeBuilder()

    def to_builder(self) -> "ChangeBuilder":
        return ChangeBuilder().from_change(self)


class ChangeBuilder(ResourceBuilder[Change]):
    kind = ResourceKind.CHANGE

    def __init__(self) -> None:
        super().__init__()
        self._additions: list[ResourceRecordSet] = []
        self._deletions: list[ResourceRecordSet] = []
        self._start_time: datetime | None = None
        self._status: str | None = None

    def id(self, change_id: int | None) -> "ChangeBuilder":
        self._numeric_id = change_id
        return self

    def add_addition(self, addition: ResourceRecordSet) -> "ChangeBuilder":
        self._additions.append(require(addition, "additions"))
        return self

    def additions(self, additions: Iterable[ResourceRecordSet] | None) -> "ChangeBuilder":
        for addition in additions or ():
            self.add_addition(addition)
        return self

    def add_deletion(self, deletion: ResourceRecordSet) -> "ChangeBuilder":
        self._deletions.append(require(deletion, "deletions"))
        return self

    def deletions(self, deletions: Iterable[ResourceRecordSet] | None) -> "ChangeBuilder":
        for deletion in deletions or ():
            self.add_deletion(deletion)
        return self

    def start_time(self, start_time: datetime | None) -> "ChangeBuilder":
        self._start_time = start_time
        return self

    def status(self, status: str | None) -> "ChangeBuilder":
        self._status = status
        return self

    def from_change(self, change: Change) -> "ChangeBuilder":
        self._from_resource(change)
        self._additions = list(change.additions)
        self._deletions = list(change.deletions)
        self._start_time = change.start_time
        self._status = change.status
        return self

    def build(self) -> Change:
        return Change(
            identity=self._identity(),
            additions=tuple(self._additions),
            deletions=tuple(self._deletions),
            start_time=self._start_time,
            status=self._status,
        )
