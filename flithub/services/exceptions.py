"""
Domain exceptions for the service layer.

These exceptions are raised by services and converted into HTTP responses
by the handlers registered in flithub.main. WriteError is the exception:
import pipelines catch it per row and never let it reach the API layer.
"""

from __future__ import annotations


class ServiceError(Exception):
    """Base exception for service layer errors."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ValidationError(ServiceError):
    """Malformed or empty top-level request input."""

    def __init__(self, message: str, field: str | None = None):
        self.field = field
        super().__init__(message)


class UnauthorizedError(ServiceError):
    """Missing or invalid credentials."""


class ForbiddenError(ServiceError):
    """Authenticated caller lacks the required role."""


class IdentityServiceError(ServiceError):
    """The identity provider could not be reached or answered unexpectedly."""


class ReferenceDataError(ServiceError):
    """Existing providers/resources could not be loaded; the batch is aborted."""


class WriteError(ServiceError):
    """The record store rejected an insert or update."""

    def __init__(self, entity: str, message: str):
        self.entity = entity
        super().__init__(message)
