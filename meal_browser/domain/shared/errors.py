"""
Domain exceptions.

Typed exceptions for explicit error handling.
The meal list only reacts to NetworkError; everything else propagates.
"""

from __future__ import annotations

from typing import Optional


# ═══════════════════════════════════════════════════════════
# BASE EXCEPTION
# ═══════════════════════════════════════════════════════════


class DomainError(Exception):
    """
    Base exception for all domain errors.

    Allows catching all domain errors with single except clause.
    """

    pass


# ═══════════════════════════════════════════════════════════
# VALIDATION EXCEPTIONS
# ═══════════════════════════════════════════════════════════


class ValidationError(DomainError):
    """
    Input validation failed.

    Raised when:
    - An operation is called before its inputs exist
      (e.g. retrying meals before any diet was loaded)
    - Out of range values

    Example:
        >>> raise ValidationError("No diet has been loaded yet")
    """

    pass


# ═══════════════════════════════════════════════════════════
# EXTERNAL SERVICE EXCEPTIONS
# ═══════════════════════════════════════════════════════════


class ExternalServiceError(DomainError):
    """
    External service call failed.

    Base class for all external service errors.

    Example:
        >>> raise ExternalServiceError("Client not initialized, use async with")
    """

    pass


class NetworkError(ExternalServiceError):
    """
    Transport or HTTP failure talking to the meal API.

    Covers non-2xx statuses, connection errors, timeouts and
    unreadable bodies. Not interpreted further by the meal list:
    str(error) is the reason shown to the user.

    Example:
        >>> raise NetworkError("HTTP 500", status=500)
    """

    def __init__(self, message: str, status: Optional[int] = None) -> None:
        super().__init__(message)
        self.status = status

    @property
    def reason(self) -> str:
        """Human readable failure reason."""
        return str(self)


class RequestTimeoutError(NetworkError):
    """
    API call timed out.

    Example:
        >>> raise RequestTimeoutError("Meal API timeout after 10s")
    """

    pass


class InvalidPayloadError(NetworkError):
    """
    Response body could not be parsed into domain models.

    Raised when:
    - Body is not JSON
    - Expected list/object shape missing
    - Required field (id, name) missing or wrong type

    Example:
        >>> raise InvalidPayloadError("Expected a list of meals")
    """

    pass


class MealNotFoundError(NetworkError):
    """
    Meal does not exist (HTTP 404 on the meal detail endpoint).

    Example:
        >>> raise MealNotFoundError("Meal 42 not found", status=404)
    """

    pass
