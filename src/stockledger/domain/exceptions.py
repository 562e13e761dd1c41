"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.
Each kind is a distinct class so callers can tell "stock ran out" apart from
"order is in the wrong state" or "record does not exist".
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """An argument was malformed or non-positive."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class ConflictError(DomainException):
    """A unique key (e.g. product x warehouse) already exists."""


class InsufficientStockError(DomainException):
    """The requested amount exceeds what is available."""


class InvalidStateError(DomainException):
    """An operation was attempted from a status that does not permit it."""

    def __init__(self, message: str, expected: str | None = None, actual: str | None = None) -> None:
        super().__init__(message)
        self.expected = expected
        self.actual = actual


class RepositoryError(Exception):
    """The backing store failed (I/O, corrupt data).

    Not a DomainException: it signals an infrastructure fault that the
    caller may retry, not a business rule violation.
    """
