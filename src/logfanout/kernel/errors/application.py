"""Application-layer errors."""

from __future__ import annotations

from logfanout.kernel.errors.base import BaseError


class ApplicationError(BaseError):
    """A use case could not run, e.g. because it was misconfigured."""

    default_code = "application_error"


__all__ = ["ApplicationError"]
