"""
Built-in exception types raised by the service layer.
"""
from __future__ import annotations

from autoresponder.core.exceptions.base import ProjectError


class ConfigurationError(ProjectError):
    """Invalid or missing configuration."""

    default_code = "CONFIGURATION_ERROR"
    default_http_status = 500


class ValidationError(ProjectError):
    """Request or input validation failed."""

    default_code = "VALIDATION_ERROR"
    default_http_status = 400


class NotFoundError(ProjectError):
    """Requested rule, message or settings row not found."""

    default_code = "NOT_FOUND"
    default_http_status = 404


class ExternalServiceError(ProjectError):
    """Database or reply transport failed."""

    default_code = "EXTERNAL_SERVICE_ERROR"
    default_http_status = 502
