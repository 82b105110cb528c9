"""Resource kinds and their wire tags.

The wire tag of every kind is listed explicitly (``dns#<lowerCamel>``) instead
of being derived by a case conversion at runtime.
"""

from __future__ import annotations

from enum import Enum

from core.errors import DecodeError


class ResourceKind(str, Enum):
    """Closed set of resource schemas understood by the client."""

    CHANGE = "Change"
    CHANGES_LIST_RESPONSE = "ChangesListResponse"
    MANAGED_ZONE = "ManagedZone"
    MANAGED_ZONES_LIST_RESPONSE = "ManagedZonesListResponse"
    PROJECT = "Project"
    RESOURCE_RECORD_SET = "ResourceRecordSet"
    RESOURCE_RECORD_SETS_LIST_RESPONSE = "ResourceRecordSetsListResponse"

    @property
    def wire_value(self) -> str:
        """Tag carried in the ``kind`` field of wire payloads."""

        return _TO_WIRE[self]

    @classmethod
    def from_wire(cls, tag: str) -> "ResourceKind":
        """Parse a wire tag; unknown tags are a decode error."""

        try:
            return _FROM_WIRE[tag]
        except (KeyError, TypeError):
            raise DecodeError(f"unknown resource kind {tag!r}") from None

    def __str__(self) -> str:
        return self.wire_value


_TO_WIRE: dict[ResourceKind, str] = {
    ResourceKind.CHANGE: "dns#change",
    ResourceKind.CHANGES_LIST_RESPONSE: "dns#changesListResponse",
    ResourceKind.MANAGED_ZONE: "dns#managedZone",
    ResourceKind.MANAGED_ZONES_LIST_RESPONSE: "dns#managedZonesListResponse",
    ResourceKind.PROJECT: "dns#project",
    ResourceKind.RESOURCE_RECORD_SET: "dns#resourceRecordSet",
    ResourceKind.RESOURCE_RECORD_SETS_LIST_RESPONSE: "dns#resourceRecordSetsListResponse",
}

_FROM_WIRE: dict[str, ResourceKind] = {wire: kind for kind, wire in _TO_WIRE.items()}
