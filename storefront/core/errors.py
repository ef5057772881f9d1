from __future__ import annotations

from typing import Optional


class StorefrontError(Exception):
    """Base class for failures that services report to the HTTP boundary."""

    status_code = 500

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ValidationError(StorefrontError):
    """Missing or malformed input."""

    status_code = 400

    def __init__(self, message: str, fields: Optional[list[str]] = None):
        super().__init__(message)
        self.fields = list(fields or [])


class NotFoundError(StorefrontError):
    status_code = 404

    def __init__(self, entity: str, entity_id=None):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__("{} not found.".format(entity))


class ConflictError(StorefrontError):
    status_code = 409


class StoreError(StorefrontError):
    """Underlying data-store failure; the message never reaches the client."""

    status_code = 503


def require_positive_id(value, label: str = "id") -> int:
    try:
        parsed = int(value)
    except (TypeError, ValueError):
        raise ValidationError("Invalid {}.".format(label), fields=[label])
    if isinstance(value, bool) or parsed <= 0 or str(value).strip() != str(parsed):
        raise ValidationError("Invalid {}.".format(label), fields=[label])
    return parsed


__all__ = [
    "ConflictError",
    "NotFoundError",
    "StoreError",
    "StorefrontError",
    "ValidationError",
    "require_positive_id",
]
