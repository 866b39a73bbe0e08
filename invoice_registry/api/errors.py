"""Translate service Failure values into HTTP errors."""

from typing import NoReturn

from fastapi import HTTPException, status

from invoice_registry.core.errors import ErrorKind, Failure

NOT_AUTHENTICATED_DETAIL = "Not authenticated"
ACCESS_DENIED_DETAIL = "Access denied"
BAD_CREDENTIALS_DETAIL = "Invalid username or password"
BEARER_CHALLENGE = {"WWW-Authenticate": "Bearer"}

# Kinds whose message is safe to show the client as-is.
_VERBATIM: dict[ErrorKind, int] = {
    ErrorKind.DUPLICATE_USERNAME: status.HTTP_400_BAD_REQUEST,
    ErrorKind.DUPLICATE_EMAIL: status.HTTP_400_BAD_REQUEST,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.ALREADY_EXISTS: status.HTTP_409_CONFLICT,
    ErrorKind.CONFLICT: status.HTTP_409_CONFLICT,
}

# Token and principal problems all look the same from outside.
_UNAUTHENTICATED = frozenset(
    {
        ErrorKind.INVALID_SIGNATURE,
        ErrorKind.MALFORMED,
        ErrorKind.EXPIRED,
        ErrorKind.PRINCIPAL_NOT_FOUND,
        ErrorKind.UNAUTHENTICATED,
    }
)


def http_exception_for(failure: Failure) -> HTTPException:
    """Return the HTTPException a client should see for failure."""
    if failure.kind in _VERBATIM:
        return HTTPException(status_code=_VERBATIM[failure.kind], detail=failure.message)
    if failure.kind is ErrorKind.BAD_CREDENTIALS:
        return HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=BAD_CREDENTIALS_DETAIL,
            headers=BEARER_CHALLENGE,
        )
    if failure.kind in _UNAUTHENTICATED:
        return HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=NOT_AUTHENTICATED_DETAIL,
            headers=BEARER_CHALLENGE,
        )
    if failure.kind is ErrorKind.FORBIDDEN:
        return HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=ACCESS_DENIED_DETAIL)
    # ROLE_SEED_MISSING and anything unmapped: server-side fault, no detail.
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="The service is not configured correctly.",
    )


def raise_for_failure(failure: Failure) -> NoReturn:
    raise http_exception_for(failure)
