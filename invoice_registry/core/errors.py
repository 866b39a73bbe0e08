"""Failure values returned by services instead of raising.

Every service operation that can fail for a known reason returns either its
result or a Failure. The HTTP layer is the only place that turns a Failure
into a response (see invoice_registry.api.errors).
"""

from dataclasses import dataclass
from enum import Enum


class ErrorKind(str, Enum):
    """Known failure reasons across registration, login, tokens and records."""

    # Registration; user-correctable, surfaced verbatim
    DUPLICATE_USERNAME = "duplicate_username"
    DUPLICATE_EMAIL = "duplicate_email"
    # Login; deliberately non-specific
    BAD_CREDENTIALS = "bad_credentials"
    # Token verification; collapsed to "unauthenticated"
    INVALID_SIGNATURE = "invalid_signature"
    MALFORMED = "malformed"
    EXPIRED = "expired"
    # Request authentication and access policy
    PRINCIPAL_NOT_FOUND = "principal_not_found"
    UNAUTHENTICATED = "unauthenticated"
    FORBIDDEN = "forbidden"
    # Deployment fault: the default role was never seeded
    ROLE_SEED_MISSING = "role_seed_missing"
    # Domain records
    NOT_FOUND = "not_found"
    ALREADY_EXISTS = "already_exists"
    CONFLICT = "conflict"


TOKEN_ERROR_KINDS = frozenset(
    {ErrorKind.INVALID_SIGNATURE, ErrorKind.MALFORMED, ErrorKind.EXPIRED}
)


@dataclass(frozen=True)
class Failure:
    """A failed operation: what went wrong and an internal description."""

    kind: ErrorKind
    message: str = ""
