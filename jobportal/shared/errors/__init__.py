from .base import AppError, DomainError, InfrastructureError, RepositoryError, ValidationError

__all__ = [
    "AppError",
    "DomainError",
    "InfrastructureError",
    "RepositoryError",
    "ValidationError",
]
