# app/exceptions.py
"""
Domain errors raised by the services and mapped to HTTP responses in main.py.
None of them is retried: they are surfaced to the caller as-is.
"""


class GarageError(Exception):
    status_code = 500

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class AuthorizationDenied(GarageError):
    """The caller lacks the role or garage match the operation requires."""
    status_code = 403


class NotFound(GarageError):
    """Row does not exist, or is not visible to the caller."""
    status_code = 404


class ConstraintViolation(GarageError):
    """Referential, uniqueness or enumeration violation reported by the database."""
    status_code = 409
