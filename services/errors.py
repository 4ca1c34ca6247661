# services/errors.py
"""
Failure kinds raised by the auth and messaging layers.

Each carries the HTTP status the handler boundary maps it to, so routes only
need one ``except ServiceError`` branch.
"""
from typing import Optional


class ServiceError(Exception):
    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class Unauthenticated(ServiceError):
    status_code = 401
    default_message = "Authentication required"


class InvalidCredential(ServiceError):
    status_code = 401
    default_message = "Invalid or expired token"


class Forbidden(ServiceError):
    status_code = 403
    default_message = "Forbidden"


class InvalidInput(ServiceError):
    status_code = 400
    default_message = "Invalid request"


class InvalidReference(ServiceError):
    status_code = 400
    default_message = "Invalid reference: One of the IDs provided does not exist in the database."


class ValidationError(ServiceError):
    status_code = 400
    default_message = "Validation error"
