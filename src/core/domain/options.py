"""List query options.

`ListOptions` is immutable: every setter returns a new instance, and setting
the same option twice keeps the last value.

    options = ListOptions().max_results(10).type_with_name("A", "www.example.com.")
"""

from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import Mapping

from core.errors import ValidationError

MAX_RESULTS_LIMIT = 100


class SortOrder(str, Enum):
    ASCENDING = "ascending"
    DESCENDING = "descending"


class ListOptions:
    """Filtering, sorting and page-size knobs for list calls."""

    __slots__ = ("_params",)

    def __init__(self, params: Mapping[str, str] | None = None) -> None:
        self._params: Mapping[str, str] = MappingProxyType(dict(params or {}))

    def _with(self, **values: str) -> "ListOptions":
        return ListOptions({**self._params, **values})

    def max_results(self, max_results: int) -> "ListOptions":
        """Page size, 0..100 inclusive; the server defaults to 100."""

        if max_results is None:
            raise ValidationError("maxResults")
        if isinstance(max_results, bool) or not isinstance(max_results, int):
            raise ValidationError("maxResults", f"maxResults must be an integer, got {max_results!r}")
        if not 0 <= max_results <= MAX_RESULTS_LIMIT:
            raise ValidationError("maxResults", f"maxResults must be within 0..{MAX_RESULTS_LIMIT}, got {max_results!r}")
        return self._with(maxResults=str(max_results))

    def name(self, name: str) -> "ListOptions":
        """Exact match on the fully qualified resource name."""

        if not name:
            raise ValidationError("name")
        return self._with(name=name)

    def type_with_name(self, record_type: str, name: str) -> "ListOptions":
        """Filter on record type; the server only accepts it together with a name."""

        if not record_type:
            raise ValidationError("type")
        if not name:
            raise ValidationError("name")
        return self._with(type=record_type, name=name)

    def sort_order(self, order: SortOrder | str) -> "ListOptions":
        if order is None:
            raise ValidationError("sortOrder")
        try:
            value = SortOrder(order)
        except ValueError:
            raise ValidationError("sortOrder", f"unknown sort order {order!r}") from None
        return self._with(sortOrder=value.value)

    @property
    def query_params(self) -> Mapping[str, str]:
        """Wire-level query parameters, keyed by their API names."""

        return self._params

    def get(self, key: str) -> str | None:
        return self._params.get(key)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ListOptions):
            return NotImplemented
        return dict(self._params) == dict(other._params)

    def __hash__(self) -> int:
        return hash(frozenset(self._params.items()))

    def __repr__(self) -> str:
        inner = ", ".join(f"{key}={value}" for key, value in sorted(self._params.items()))
        return f"ListOptions{{{inner}}}"
