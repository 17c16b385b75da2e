"""
Application Errors
==================

Exception types shared by the domain, application and API layers.

Validation failures are plain ``ValueError``s; the classes below cover the
remaining outcomes the API maps to dedicated HTTP status codes.
"""


class NotFoundError(LookupError):
    """Raised when a requested entity does not exist (HTTP 404)."""


class ConcurrencyError(RuntimeError):
    """Raised when an optimistic-lock update matched no document (HTTP 409)."""


class AuthenticationError(PermissionError):
    """Raised when the admin session is missing or invalid (HTTP 401)."""
