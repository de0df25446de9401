"""Ingestion – raw payload validation and normalisation."""
from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from logfanout.kernel.errors import ValidationError
from logfanout.kernel.events import (
    HIGHEST_PRIORITY,
    LOWEST_PRIORITY,
    Category,
    LogEvent,
    classify,
    normalize_severity,
)

_MISSING = object()


def _required_text(raw: Mapping[str, Any], field: str, errors: list[dict[str, Any]]) -> str:
    value = raw.get(field)
    if not isinstance(value, str) or not value.strip():
        errors.append({"field": field, "reason": f"{field} is required"})
        return ""
    return value.strip()


def _category(raw: Mapping[str, Any], errors: list[dict[str, Any]]) -> Category:
    value = raw.get("category")
    if value is None or value == "":
        return Category.APPLICATION
    if isinstance(value, Category):
        return value
    if isinstance(value, str):
        try:
            return Category(value.strip().lower())
        except ValueError:
            pass
    errors.append({"field": "category", "reason": f"unknown category {value!r}"})
    return Category.APPLICATION


def _explicit_priority(raw: Mapping[str, Any], errors: list[dict[str, Any]]) -> int | None:
    value = raw.get("priority", _MISSING)
    if value is _MISSING or value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int) or not (
        HIGHEST_PRIORITY <= value <= LOWEST_PRIORITY
    ):
        errors.append({
            "field": "priority",
            "reason": f"priority must be an integer {HIGHEST_PRIORITY}-{LOWEST_PRIORITY}",
        })
        return None
    return value


def build_event(raw: Any) -> LogEvent:
    """Validate a producer payload and return an unpersisted :class:`LogEvent`.

    Applies defaults (``severity=info``, ``category=application``,
    ``metadata={}``) and derives ``priority`` from the declared severity
    when the producer did not set one.  Unknown severities are normalised
    to ``info`` with the lowest priority rather than rejected.

    Raises:
        ValidationError: listing every failing field.
    """
    if not isinstance(raw, Mapping):
        raise ValidationError(
            "Log event payload must be a mapping",
            errors=[{"field": "$", "reason": f"got {type(raw).__name__}"}],
        )

    errors: list[dict[str, Any]] = []
    message = _required_text(raw, "message", errors)
    source = _required_text(raw, "source", errors)
    category = _category(raw, errors)
    explicit = _explicit_priority(raw, errors)

    metadata = raw.get("metadata")
    if metadata is None:
        metadata = {}
    elif not isinstance(metadata, Mapping):
        errors.append({"field": "metadata", "reason": "metadata must be a mapping"})
        metadata = {}

    origin = raw.get("origin_address")
    if origin is not None and not isinstance(origin, str):
        errors.append({"field": "origin_address", "reason": "origin_address must be text"})
        origin = None

    if errors:
        raise ValidationError("Invalid log event", errors=errors)

    declared = raw.get("severity")
    if declared is None or declared == "":
        declared = "info"
    if origin is not None:
        origin = origin.strip() or None
    return LogEvent(
        message=message,
        source=source,
        severity=normalize_severity(declared),
        priority=explicit if explicit is not None else classify(declared),
        category=category,
        metadata=dict(metadata),
        origin_address=origin,
        priority_explicit=explicit is not None,
    )


__all__ = ["build_event"]
