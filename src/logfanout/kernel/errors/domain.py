"""Domain errors — rejected log events and missing records."""

from __future__ import annotations

from typing import Any

from logfanout.kernel.errors.base import BaseError


class DomainError(BaseError):
    """Raised when an event or request breaks a domain rule."""

    default_code = "domain_error"


class ValidationError(DomainError):
    """A raw event (or query) does not meet validation rules.

    ``errors`` is a list of field-level failures, each a dict with
    ``field`` and ``reason`` keys.  The caller is at fault; never retried.
    """

    default_code = "validation_error"

    def __init__(
        self,
        message: str,
        *,
        errors: list[dict[str, Any]] | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.errors: list[dict[str, Any]] = errors or []

    @property
    def fields(self) -> list[str]:
        return [e["field"] for e in self.errors if "field" in e]

    def to_dict(self) -> dict[str, Any]:
        payload = super().to_dict()
        payload["errors"] = self.errors
        return payload

    def log_fields(self) -> dict[str, Any]:
        fields = super().log_fields()
        fields["fields"] = self.fields
        return fields


class NotFoundError(DomainError):
    """No stored record has the requested id."""

    default_code = "not_found"

    def __init__(self, resource: str, identifier: Any = None, **kwargs: Any) -> None:
        if identifier is None:
            message = f"{resource} not found"
        else:
            message = f"{resource} '{identifier}' not found"
        super().__init__(message, **kwargs)
        self.resource = resource
        self.identifier = identifier
        self.detail.setdefault("resource", resource)
        if identifier is not None:
            self.detail.setdefault("id", identifier)


__all__ = [
    "DomainError",
    "NotFoundError",
    "ValidationError",
]
