"""Root error class for the logfanout error hierarchy."""

from __future__ import annotations

from typing import Any


class BaseError(Exception):
    """Every error raised by logfanout derives from this class.

    ``code`` is a stable slug callers can branch on; ``detail`` carries
    structured context that ends up in log lines and API payloads.  When
    ``cause`` is given it is also chained as ``__cause__``.
    """

    default_code: str = "base_error"

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        detail: dict[str, Any] | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.detail: dict[str, Any] = dict(detail or {})
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"

    def to_dict(self) -> dict[str, Any]:
        """Payload shape returned to producers and admin clients."""
        payload: dict[str, Any] = {"error": self.code, "message": self.message}
        if self.detail:
            payload["detail"] = self.detail
        return payload

    def log_fields(self) -> dict[str, Any]:
        """Keyword context for structlog calls."""
        fields: dict[str, Any] = {"error_code": self.code, "error": self.message, **self.detail}
        if self.cause is not None:
            fields["cause"] = repr(self.cause)
        return fields


__all__ = ["BaseError"]
