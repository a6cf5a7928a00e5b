"""Shared domain building blocks."""

from .exceptions import DomainException, IntegrationException, ValidationException

__all__ = [
    "DomainException",
    "IntegrationException",
    "ValidationException",
]
