"""
Project exception system.

Usage:
    from autoresponder.core.exceptions import NotFoundError, ValidationError

    raise ValidationError("Question must not be empty", details={"field": "question"})
    raise NotFoundError("Rule not found", details={"rule_id": str(rule_id)})

Routers translate these into HTTP responses using ``exc.http_status`` and
``exc.message``.
"""
from autoresponder.core.exceptions.base import ProjectError
from autoresponder.core.exceptions.errors import (
    ConfigurationError,
    ExternalServiceError,
    NotFoundError,
    ValidationError,
)

__all__ = [
    "ProjectError",
    "ConfigurationError",
    "ValidationError",
    "NotFoundError",
    "ExternalServiceError",
]
