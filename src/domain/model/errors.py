"""Domain-level exceptions.

Services raise these errors to express business rule violations.
Route handlers catch them and map to appropriate HTTP status codes.
"""


class DomainError(Exception):
    """Base class for all domain errors."""


class NotFoundError(DomainError):
    """Requested entity does not exist."""


class DuplicateError(DomainError):
    """Entity with the same unique key already exists."""


class ValidationError(DomainError):
    """Input violates a business validation rule."""


class AuthenticationError(DomainError):
    """Caller could not be authenticated.

    Deliberately carries no detail about which check failed.
    """

    def __init__(self, message: str = "Not authenticated"):
        super().__init__(message)


# ── Session tokens ───────────────────────────────────────


class TokenError(DomainError):
    """Base class for session token validation failures."""


class MalformedTokenError(TokenError):
    """Token is not a structurally valid signed token."""


class ExpiredTokenError(TokenError):
    """Token expiry lies in the past."""


class InvalidTokenError(TokenError):
    """Token signature or claims did not verify."""


# ── Payments ─────────────────────────────────────────────


class InvalidAmountError(ValidationError):
    """Requested payment amount is missing or below the minimum."""

    def __init__(self, message: str = "Invalid amount"):
        super().__init__(message)


class PaymentError(DomainError):
    """Payment processor rejected the request or could not be reached.

    The message is safe to show to clients; the processor error is kept
    as __cause__ for server-side diagnostics only.
    """

    def __init__(self, message: str = "Payment failed"):
        super().__init__(message)
