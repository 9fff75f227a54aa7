"""Domain errors raised by the contact services.

Routers translate these into HTTP responses; services never import FastAPI.
"""


class ImportValidationError(ValueError):
    """Malformed top-level import request (400)."""


class NotFoundError(ValueError):
    """Requested record does not exist (404)."""


class AuthorizationError(PermissionError):
    """Acting user may not touch this record (403)."""
