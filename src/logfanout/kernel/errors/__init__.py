"""Kernel error hierarchy — public re-export surface.

Hierarchy::

    BaseError
    ├── DomainError          (domain.py)
    │   ├── ValidationError
    │   └── NotFoundError
    ├── ApplicationError     (application.py)
    └── InfrastructureError  (infrastructure.py)
        ├── PersistenceError
        └── DeliveryFailure
"""

from logfanout.kernel.errors.application import ApplicationError
from logfanout.kernel.errors.base import BaseError
from logfanout.kernel.errors.domain import (
    DomainError,
    NotFoundError,
    ValidationError,
)
from logfanout.kernel.errors.infrastructure import (
    DeliveryFailure,
    InfrastructureError,
    PersistenceError,
)

__all__ = [
    "ApplicationError",
    "BaseError",
    "DeliveryFailure",
    "DomainError",
    "InfrastructureError",
    "NotFoundError",
    "PersistenceError",
    "ValidationError",
]
