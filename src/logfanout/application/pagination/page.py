"""Application pagination – Page."""
from __future__ import annotations

import dataclasses
from typing import Any, Callable, Generic, TypeVar

from logfanout.application.pagination.page_request import PageRequest

T = TypeVar("T")


@dataclasses.dataclass(frozen=True)
class Page(Generic[T]):
    """One page of a query result plus the size of the whole result set."""

    items: list[T]
    total: int
    page: int
    size: int

    @classmethod
    def of(cls, items: list[T], total: int, request: PageRequest) -> "Page[T]":
        return cls(items=items, total=total, page=request.page, size=request.size)

    @property
    def total_pages(self) -> int:
        if self.total <= 0 or self.size <= 0:
            return 0
        return -(-self.total // self.size)

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    @property
    def has_previous(self) -> bool:
        return self.page > 1

    def pagination(self) -> dict[str, int]:
        return {
            "page": self.page,
            "limit": self.size,
            "total": self.total,
            "pages": self.total_pages,
        }

    def to_dict(self, serialize: Callable[[T], Any]) -> dict[str, Any]:
        """Response body: ``{"items": [...], "pagination": {...}}``."""
        return {"items": [serialize(item) for item in self.items], "pagination": self.pagination()}


__all__ = ["Page"]
