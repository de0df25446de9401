"""Application pagination – PageRequest, Sort, SortDirection."""
from __future__ import annotations

import dataclasses
from enum import Enum

from logfanout.kernel.errors import ValidationError

#: Fields a log query may be ordered by.
SORTABLE_FIELDS: frozenset[str] = frozenset(
    {"created_at", "priority", "severity", "source", "category", "message"}
)

MAX_PAGE_SIZE = 1000


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


@dataclasses.dataclass(frozen=True)
class Sort:
    """Order of a log query; newest first unless told otherwise."""

    field: str = "created_at"
    direction: SortDirection = SortDirection.DESC

    def __post_init__(self) -> None:
        if self.field not in SORTABLE_FIELDS:
            raise ValueError(f"cannot sort by {self.field!r}")

    @property
    def descending(self) -> bool:
        return self.direction is SortDirection.DESC

    @classmethod
    def from_params(cls, sort_by: str | None = None, sort_order: str | None = None) -> "Sort":
        """Parse ``sortBy``/``sortOrder`` style request values.

        Raises:
            ValidationError: unknown field or direction.
        """
        field = (sort_by or "created_at").strip()
        try:
            direction = SortDirection((sort_order or "desc").strip().lower())
        except ValueError:
            raise ValidationError(
                "Invalid sort",
                errors=[{"field": "sort_order", "reason": f"expected asc or desc, got {sort_order!r}"}],
            ) from None
        if field not in SORTABLE_FIELDS:
            raise ValidationError(
                "Invalid sort",
                errors=[{"field": "sort_by", "reason": f"cannot sort by {field!r}"}],
            )
        return cls(field, direction)


@dataclasses.dataclass(frozen=True)
class PageRequest:
    """1-based page number and page size."""

    page: int = 1
    size: int = 50

    def __post_init__(self) -> None:
        if self.page < 1:
            raise ValueError("page must be >= 1")
        if not 1 <= self.size <= MAX_PAGE_SIZE:
            raise ValueError(f"size must be between 1 and {MAX_PAGE_SIZE}")

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.size

    @classmethod
    def from_params(cls, page: int | str | None = None, limit: int | str | None = None) -> "PageRequest":
        """Parse ``page``/``limit`` request values; blanks fall back to defaults.

        Raises:
            ValidationError: a value is not an integer or out of range.
        """
        values: dict[str, int] = {}
        errors: list[dict[str, str]] = []
        for name, key, raw in (("page", "page", page), ("limit", "size", limit)):
            if raw is None or raw == "":
                continue
            try:
                values[key] = int(raw)
            except (TypeError, ValueError):
                errors.append({"field": name, "reason": f"not an integer: {raw!r}"})
        if values.get("page", 1) < 1:
            errors.append({"field": "page", "reason": "must be >= 1"})
        if not 1 <= values.get("size", 1) <= MAX_PAGE_SIZE:
            errors.append({"field": "limit", "reason": f"must be between 1 and {MAX_PAGE_SIZE}"})
        if errors:
            raise ValidationError("Invalid pagination", errors=errors)
        return cls(**values)


__all__ = ["MAX_PAGE_SIZE", "PageRequest", "SORTABLE_FIELDS", "Sort", "SortDirection"]
