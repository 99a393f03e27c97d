"""Error hierarchy for netaccess.

Error layers:
- NetAccessError: Base class for all netaccess errors
- DomainError: Policy decisions and invalid input (the caller's problem)
- InfrastructureError: Identity provider or configuration failures

The access-level resolver never lets an InfrastructureError escape; it fails
closed instead. Errors raised at the request boundary (e.g. by
CallerAccess.guard) are for the embedding service to map onto its own API.
"""


class NetAccessError(Exception):
    """Base class for all netaccess errors."""

    def __init__(self, message: str, code: str | None = None) -> None:
        self.message = message
        self.code = code or self.__class__.__name__
        super().__init__(message)


# =============================================================================
# Domain Errors
# =============================================================================


class DomainError(NetAccessError):
    """Base class for domain errors."""


class ValidationError(DomainError):
    """Input validation failed."""

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message, code="VALIDATION_ERROR")
        self.field = field


class AuthorizationError(DomainError):
    """Caller not authorized to see the requested usage data."""


# =============================================================================
# Infrastructure Errors
# =============================================================================


class InfrastructureError(NetAccessError):
    """Base class for infrastructure/system errors."""


class ExternalServiceError(InfrastructureError):
    """An identity fact could not be obtained from the platform."""


class ConfigurationError(InfrastructureError):
    """System misconfiguration detected."""
