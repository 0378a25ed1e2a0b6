"""Domain-specific exceptions and helpers for consistent API errors."""

from __future__ import annotations

from fastapi import status
from fastapi.responses import JSONResponse


class DomainError(Exception):
    """Base class for domain errors.

    The message is user-facing; upstream detail belongs in logs, not here.
    """

    code: str = "domain_error"
    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str, *, code: str | None = None, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        if code:
            self.code = code
        if status_code:
            self.status_code = status_code


class ValidationError(DomainError):
    code = "validation_error"
    status_code = status.HTTP_400_BAD_REQUEST


class UpstreamTransportError(DomainError):
    """The generation call failed or returned a non-success status."""

    code = "upstream_transport_error"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


class UpstreamServiceError(DomainError):
    """The generation service answered with an explicit JSON error."""

    code = "upstream_service_error"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


class UpstreamShapeError(DomainError):
    """The generation service answered with a body we cannot interpret."""

    code = "upstream_shape_error"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


class UpstreamFetchError(DomainError):
    """Fetching the video from a pointer URL failed."""

    code = "upstream_fetch_error"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


class InternalError(DomainError):
    code = "internal_error"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


def to_json_response(err: DomainError) -> JSONResponse:
    """Convert DomainError to the `{error, code}` envelope."""
    return JSONResponse(
        status_code=err.status_code,
        content={"error": err.message, "code": err.code},
    )
