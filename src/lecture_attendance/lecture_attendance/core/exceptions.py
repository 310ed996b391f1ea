class DomainError(Exception):
    """Base exception for business rule violations."""

    kind = "INTERNAL"


class ValidationError(DomainError):
    """Raised when input data is malformed or out of range."""

    kind = "VALIDATION"


class AuthorizationError(DomainError):
    """Raised when the caller is not allowed to run a procedure."""

    kind = "UNAUTHORIZED"


class NotFoundError(DomainError):
    """Raised when a lookup or delete targets a missing row."""

    kind = "NOT_FOUND"


class ConflictError(DomainError):
    """Raised when a create collides with an existing primary or unique key."""

    kind = "CONFLICT"


class DependencyError(DomainError):
    """Raised when a row references a Student, Lecture or Module that does not exist."""

    kind = "DEPENDENCY"


class InternalError(DomainError):
    """Raised for unexpected store failures surfaced as a generic condition."""

    kind = "INTERNAL"
