"""Error taxonomy for the identity bounded context.

Every error carries a stable ``code`` and the HTTP status it maps to. The
application layer raises them; only the presentation layer translates them
into responses.
"""

from __future__ import annotations


class IdentityError(Exception):
    """Base class for all identity errors."""

    code = "IDENTITY_ERROR"
    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class BadRequestError(IdentityError):
    """Caller-correctable failure.

    Raised for invalid input, missing preconditions (nonexistent role, no
    default department) and users that cannot be found at read time.
    """

    code = "BAD_REQUEST"
    status_code = 400


class ConflictError(BadRequestError):
    """Raised when a uniqueness rule would be violated.

    A bad-request class error: the caller can fix it by choosing another
    account or name.
    """

    code = "CONFLICT"
    status_code = 409


class NotFoundError(IdentityError):
    """Raised when an addressed record does not exist."""

    code = "NOT_FOUND"
    status_code = 404


class InternalServerError(IdentityError):
    """Infrastructure or consistency failure the caller cannot correct."""

    code = "INTERNAL_ERROR"
    status_code = 500


class InconsistentAggregateError(InternalServerError):
    """Raised when a stored reference points at a record that does not exist.

    An aggregate is never returned with such a reference left unresolved.
    """

    code = "INCONSISTENT_AGGREGATE"
