class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when a caller passes structurally invalid input (wrong shape, unknown column, bad page size)."""


class DataSourceError(DomainError):
    """Raised when a data snapshot cannot be read or decoded."""
