"""Identity model shared by every Cloud DNS resource.

Each resource carries a kind tag plus two opaque identifiers. Concrete types
re-expose the meaningful one under a domain name (``name``, ``id``, ``number``);
the raw ``_numeric_id`` / ``_string_id`` accessors are for subclasses only.

Equality and hashing cover the identity triple and the concrete type, nothing
else: two zones that differ only in ``description`` compare equal.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, Iterable, TypeVar

from core.domain.kinds import ResourceKind
from core.errors import ValidationError

R = TypeVar("R", bound="Resource")


def require(value: Any, field: str) -> Any:
    """Return `value` or raise `ValidationError` naming the missing field."""

    if value is None:
        raise ValidationError(field)
    return value


@dataclass(frozen=True)
class Identity:
    """The (kind, numeric id, string id) triple."""

    kind: ResourceKind
    numeric_id: int | None = None
    string_id: str | None = None

    def __post_init__(self) -> None:
        require(self.kind, "kind")


@dataclass(frozen=True, eq=False, repr=False, kw_only=True)
class Resource:
    """Base entity; immutable, compared by identity only."""

    identity: Identity

    @property
    def kind(self) -> ResourceKind:
        return self.identity.kind

    @property
    def _numeric_id(self) -> int | None:
        return self.identity.numeric_id

    @property
    def _string_id(self) -> str | None:
        return self.identity.string_id

    def _string_fields(self) -> Iterable[tuple[str, Any]]:
        """Fields shown by `str()`, in a fixed order. Subclasses extend this."""

        yield "kind", self.kind.wire_value

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Resource):
            return NotImplemented
        return type(self) is type(other) and self.identity == other.identity

    def __hash__(self) -> int:
        return hash(self.identity)

    def __str__(self) -> str:
        parts = [f"{key}={_render(value)}" for key, value in self._string_fields() if value is not None]
        return f"{type(self).__name__}{{{', '.join(parts)}}}"

    __repr__ = __str__


def _render(value: Any) -> str:
    if isinstance(value, frozenset):
        return "[" + ", ".join(sorted(str(v) for v in value)) + "]"
    if isinstance(value, tuple):
        return "[" + ", ".join(str(v) for v in value) + "]"
    return str(value)


class ResourceBuilder(Generic[R]):
    """Mutable builder holding the identity fields of one concrete kind.

    Concrete builders subclass it with the result type as parameter, expose
    the identifiers under domain names and implement `build()`.
    """

    kind: ResourceKind

    def __init__(self) -> None:
        self._numeric_id: int | None = None
        self._string_id: str | None = None

    def _identity(self) -> Identity:
        return Identity(kind=self.kind, numeric_id=self._numeric_id, string_id=self._string_id)

    def _from_resource(self, resource: Resource) -> None:
        if resource.kind is not self.kind:
            raise ValidationError("kind", f"cannot seed a {self.kind.value} builder from {resource.kind.value}")
        self._numeric_id = resource._numeric_id
        self._string_id = resource._string_id

    def build(self) -> R:  # pragma: no cover - abstract
        raise NotImplementedError
