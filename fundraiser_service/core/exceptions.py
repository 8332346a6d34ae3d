"""
Error taxonomy for the fundraiser store.

Every store operation reports failure through one of these; the HTTP layer
maps them to status codes and response envelopes in ``fundraiser_service.main``.
"""
from typing import Iterable, Optional


class StoreError(Exception):
    """Base class for expected store failures"""

    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(StoreError):
    """Entity id has no match"""

    status_code = 404


class InvalidStateError(StoreError):
    """Operation not permitted in the entity's current state"""

    status_code = 400


class ValidationError(StoreError):
    """One or more field-level violations, always reported together"""

    status_code = 400

    def __init__(self, errors: Iterable[str], message: str = "Validation failed"):
        super().__init__(message)
        self.errors = list(errors)


class InternalError(Exception):
    """Unexpected failure, wrapped with a route-specific message"""

    status_code = 500

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.message = message
        self.cause = cause
