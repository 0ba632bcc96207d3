"""Custom exception classes for account and expense operations.

Services raise these typed errors; the exception handlers registered in
``create_app`` turn them into JSON responses. Each exception carries an
error_code that maps to the catalog in errors.py.
"""

from typing import Any


class ExpenseTrackerError(Exception):
    """Base exception for all domain errors.

    Attributes:
        error_code: Code from the error catalog (e.g., "AUTH_001")
        details: Additional context about the error (for logging only)
        http_status: HTTP status code to return (default: 500)
    """

    default_code = "SYS_001"
    default_status = 500

    def __init__(
        self,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
        http_status: int | None = None,
    ):
        """Initialize the exception.

        Args:
            error_code: Error code from errors.py
            details: Additional error context (not shown to users)
            http_status: HTTP status code
        """
        self.error_code = error_code or self.default_code
        self.details = details or {}
        self.http_status = http_status or self.default_status
        super().__init__(self.error_code)


class ValidationError(ExpenseTrackerError):
    """Raised when input fails a business rule the request schema cannot express."""

    default_code = "VAL_001"
    default_status = 400


class Unauthorized(ExpenseTrackerError):
    """Raised when a bearer token is missing, malformed, tampered with or expired."""

    default_code = "AUTH_003"
    default_status = 401


class InvalidCredentials(ExpenseTrackerError):
    """Raised on failed login.

    The same code is used for an unknown email and a wrong password so the
    response never reveals which one was wrong.
    """

    default_code = "AUTH_002"
    default_status = 401


class NotFound(ExpenseTrackerError):
    """Raised when a resource is absent or not owned by the caller."""

    default_code = "API_001"
    default_status = 404


class Conflict(ExpenseTrackerError):
    """Raised when a write would break a uniqueness rule (duplicate email)."""

    default_code = "AUTH_001"
    default_status = 400


class ConfigurationError(Exception):
    """Raised when the service is configured unsafely and must not start."""
