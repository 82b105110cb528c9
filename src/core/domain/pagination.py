"""Marker-based pagination.

A `Page` is one fetched batch plus an optional continuation marker. A
`PagedIterator` turns a first page and a bound "fetch page at marker"
function into a lazy, single-pass sequence of items:

- the next page is fetched only when the current one is used up;
- a fetch failure propagates to the consumer and leaves the iterator where it
  was, so calling `next()` again retries the same marker;
- a marker that was already followed raises `MarkerCycleError`.

Instances are meant for one consumer on one thread.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Generic, Iterator, TypeVar

from core.errors import MarkerCycleError

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class Page(Generic[T]):
    """One batch of items; `next_marker is None` marks the last page."""

    items: tuple[T, ...] = ()
    next_marker: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "items", tuple(self.items or ()))
        if self.next_marker == "":
            object.__setattr__(self, "next_marker", None)

    @classmethod
    def empty(cls) -> "Page[T]":
        return cls()

    @property
    def has_next(self) -> bool:
        return self.next_marker is not None

    def __iter__(self) -> Iterator[T]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)


@dataclass
class PagedIterator(Generic[T]):
    """Iterates items across pages, fetching the next page on demand."""

    first_page: Page[T]
    fetch_next: Callable[[str], Page[T]]
    _page: Page[T] = field(init=False, repr=False)
    _cursor: int = field(default=0, init=False, repr=False)
    _followed: set[str] = field(default_factory=set, init=False, repr=False)
    pages_fetched: int = field(default=0, init=False)

    def __post_init__(self) -> None:
        self._page = self.first_page

    @property
    def current_page(self) -> Page[T]:
        return self._page

    @property
    def exhausted(self) -> bool:
        """True once the last page is current and fully consumed."""

        return not self._page.has_next and self._cursor >= len(self._page)

    def __iter__(self) -> "PagedIterator[T]":
        return self

    def __next__(self) -> T:
        while self._cursor >= len(self._page):
            marker = self._page.next_marker
            if marker is None:
                raise StopIteration
            self._advance(marker)
        item = self._page.items[self._cursor]
        self._cursor += 1
        return item

    def _advance(self, marker: str) -> None:
        if marker in self._followed:
            raise MarkerCycleError(marker)
        logger.debug("Fetching next page at marker %r", marker)
        page = self.fetch_next(marker)
        self._followed.add(marker)
        self._page = page
        self._cursor = 0
        self.pages_fetched += 1

    def to_list(self) -> list[T]:
        """Drain the remaining items into a list."""

        return list(self)


def paginate(first_page: Page[T], fetch_next: Callable[[str], Page[T]]) -> PagedIterator[T]:
    return PagedIterator(first_page=first_page, fetch_next=fetch_next)

