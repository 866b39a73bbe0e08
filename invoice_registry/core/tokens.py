"""Issue and verify signed, time-bounded access tokens (JWT, HMAC)."""

from datetime import UTC, datetime, timedelta
from typing import Any

import jwt

from invoice_registry.core.config import Settings
from invoice_registry.core.errors import ErrorKind, Failure

_EPOCH = datetime(1970, 1, 1, tzinfo=UTC)
_ONE_MS = timedelta(milliseconds=1)

# Expiry is checked here (millisecond resolution), not by PyJWT (whole seconds).
_DECODE_OPTIONS: dict[str, Any] = {
    "verify_signature": True,
    "verify_exp": False,
    "verify_iat": False,
    "verify_nbf": False,
    "require": ["sub", "iat", "exp"],
}


def to_epoch_millis(moment: datetime) -> int:
    """Whole milliseconds since the Unix epoch; naive datetimes are taken as UTC."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=UTC)
    return (moment - _EPOCH) // _ONE_MS


class TokenCodec:
    """
    Encodes and verifies access tokens for a single signing key.

    Tokens carry three claims: sub (the identifier the client logged in with),
    iat and exp (NumericDate seconds, millisecond precision). exp is always
    iat + ttl_ms. A token is expired once now >= exp.
    """

    def __init__(self, signing_key: bytes, ttl_ms: int, algorithm: str = "HS256") -> None:
        if not signing_key:
            raise ValueError("signing_key must be non-empty")
        if ttl_ms <= 0:
            raise ValueError("ttl_ms must be positive")
        self._key = signing_key
        self._algorithm = algorithm
        self.ttl_ms = ttl_ms

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenCodec":
        return cls(
            signing_key=settings.jwt_signing_key,
            ttl_ms=settings.JWT_EXPIRATION_MILLISECONDS,
            algorithm=settings.JWT_ALGORITHM,
        )

    def issue(self, subject: str, now: datetime | None = None) -> str:
        """Create a signed token for subject, valid from now for ttl_ms."""
        if not subject:
            raise ValueError("subject must be non-empty")
        issued_ms = to_epoch_millis(now or datetime.now(UTC))
        expires_ms = issued_ms + self.ttl_ms
        payload: dict[str, Any] = {
            "sub": subject,
            "iat": issued_ms / 1000,
            "exp": expires_ms / 1000,
        }
        return jwt.encode(payload, self._key, algorithm=self._algorithm)

    def verify(self, token: str, now: datetime | None = None) -> str | Failure:
        """
        Return the token's subject, or a Failure:
        INVALID_SIGNATURE if the signature (or its algorithm) does not match this key,
        MALFORMED if the token or its claims cannot be parsed,
        EXPIRED if now is at or past the token's expiry.
        """
        try:
            payload = jwt.decode(
                token,
                self._key,
                algorithms=[self._algorithm],
                options=_DECODE_OPTIONS,
            )
        except (jwt.InvalidSignatureError, jwt.InvalidAlgorithmError) as e:
            return Failure(ErrorKind.INVALID_SIGNATURE, str(e))
        except jwt.PyJWTError as e:
            return Failure(ErrorKind.MALFORMED, str(e))

        subject = payload.get("sub")
        if not isinstance(subject, str) or not subject:
            return Failure(ErrorKind.MALFORMED, "Token subject is missing or not a string")
        try:
            expires_ms = round(float(payload["exp"]) * 1000)
        except (TypeError, ValueError, OverflowError):
            return Failure(ErrorKind.MALFORMED, "Token expiry is not a number")

        if to_epoch_millis(now or datetime.now(UTC)) >= expires_ms:
            return Failure(ErrorKind.EXPIRED, "Token has expired")
        return subject
