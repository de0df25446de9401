"""Observability – redaction of secrets carried in event metadata."""
from __future__ import annotations

from collections.abc import Mapping
from typing import Any

#: Keys redacted by default; device payloads routinely carry credentials.
DEFAULT_SENSITIVE_FIELDS: frozenset[str] = frozenset(
    {"password", "secret", "token", "api_key", "authorization", "device_key"}
)


class SensitiveFieldsFilter:
    """structlog processor masking values whose key is sensitive.

    Keys match case-insensitively at any depth of nested mappings and
    lists, so ``metadata={"auth": {"Token": ...}}`` is masked too.  The
    input is never mutated.
    """

    REDACTED = "[REDACTED]"

    def __init__(self, sensitive_fields: frozenset[str] | None = None) -> None:
        fields = DEFAULT_SENSITIVE_FIELDS if sensitive_fields is None else sensitive_fields
        self._fields = frozenset(f.lower() for f in fields)

    def redact(self, value: Any) -> Any:
        if isinstance(value, Mapping):
            return {
                k: self.REDACTED if str(k).lower() in self._fields else self.redact(v)
                for k, v in value.items()
            }
        if isinstance(value, (list, tuple)):
            return [self.redact(item) for item in value]
        return value

    def __call__(self, logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:  # noqa: ARG002
        return self.redact(event_dict)


__all__ = ["DEFAULT_SENSITIVE_FIELDS", "SensitiveFieldsFilter"]
