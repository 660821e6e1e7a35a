"""Custom Exception Hierarchy for the TFT winning comps collector
This module defines a typed exception hierarchy that enables precise error
handling across the collector.

Exception Handling Flow:
    1. Configuration problems raise ConfigurationError before any network call
    2. The Riot client converts HTTP failures into ProviderError subclasses
    3. The flow-restricted executor records per-call errors instead of raising
    4. Only region-level or persistence failures reach the command entry point
"""

from __future__ import annotations


class ServiceError(Exception):
    """Base exception for all collector errors."""


class ValidationError(ServiceError):
    """Raised when input validation fails."""

    def __init__(self, message: str, field: str | None = None):
        self.message = message
        self.field = field
        super().__init__(self.message)


class NotFoundError(ServiceError):
    """Raised when a requested resource cannot be located."""

    def __init__(self, message: str, resource: str | None = None):
        self.message = message
        self.resource = resource
        super().__init__(self.message)


class ProviderError(ServiceError):
    """Raised when the external Riot API fails."""

    def __init__(
        self,
        message: str,
        provider: str | None = None,
        original_error: Exception | None = None,
        status_code: int | None = None,
    ):
        self.message = message
        self.provider = provider
        self.original_error = original_error
        self.status_code = status_code
        super().__init__(self.message)


class ConfigurationError(ServiceError):
    """Raised when configuration is invalid or missing."""

    def __init__(self, message: str, key: str | None = None):
        self.message = message
        self.key = key
        super().__init__(self.message)


class DatabaseError(ServiceError):
    """Raised when database operations fail."""

    def __init__(self, message: str, operation: str | None = None):
        self.message = message
        self.operation = operation
        super().__init__(self.message)


class RateLimitError(ProviderError):
    """Raised when a provider rate limit is exceeded."""

    def __init__(self, message: str, retry_after: int | None = None, provider: str | None = None):
        super().__init__(message, provider=provider, status_code=429)
        self.retry_after = retry_after
