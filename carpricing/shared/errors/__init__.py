from .base import (
    AccessDeniedError,
    AppError,
    ConflictError,
    DomainError,
    InfrastructureError,
    NotAuthenticatedError,
    NotFoundError,
    NotPrivilegedError,
    ValidationError,
)

__all__ = [
    "AccessDeniedError",
    "AppError",
    "ConflictError",
    "DomainError",
    "InfrastructureError",
    "NotAuthenticatedError",
    "NotFoundError",
    "NotPrivilegedError",
    "ValidationError",
]
