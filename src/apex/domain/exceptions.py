"""Domain exceptions."""


class ApexError(Exception):
    """Base exception for Apex."""

    pass


class ValidationError(ApexError):
    """Validation failed for input data."""

    pass


class NotFoundError(ApexError):
    """Requested resource was not found."""

    pass


class AuthorizationError(ApexError):
    """Caller does not own the requested resource."""

    pass


class ConflictError(ApexError):
    """Document with the same file hash already exists in the report."""

    pass
