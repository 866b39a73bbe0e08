"""Request authenticator: bearer token -> principal, once per request.

Every inbound request passes through here before routing:

- No Authorization header, or a non-Bearer one: the request continues
  anonymously.
- A Bearer token that fails verification (bad signature, malformed,
  expired): also continues anonymously. Routes that need a principal reject
  it in the access policy, so open routes stay reachable with a bad token.
- A valid token whose subject no longer matches a stored user: the request
  is answered here with 401.
- Otherwise the resolved Principal is attached as request.state.principal,
  which lives only as long as this request.

The token codec and session factory are read from app.state, where
create_app() puts them.
"""

import logging

from starlette.concurrency import run_in_threadpool
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from invoice_registry.api.access import is_exempt
from invoice_registry.api.errors import BEARER_CHALLENGE, NOT_AUTHENTICATED_DETAIL
from invoice_registry.core.errors import Failure
from invoice_registry.core.tokens import TokenCodec
from invoice_registry.services.credentials import SqlCredentialStore
from invoice_registry.services.principal import Principal, resolve_principal

logger = logging.getLogger(__name__)

AUTHORIZATION_HEADER = "Authorization"
BEARER_PREFIX = "Bearer "


def extract_bearer_token(header_value: str | None) -> str | None:
    """The token from an 'Authorization: Bearer <token>' value, else None."""
    if not header_value or not header_value.startswith(BEARER_PREFIX):
        return None
    token = header_value[len(BEARER_PREFIX):].strip()
    return token or None


class RequestAuthenticatorMiddleware(BaseHTTPMiddleware):
    """Attach the caller's Principal (or None) to request.state."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request.state.principal = None
        if is_exempt(request.method, request.url.path):
            return await call_next(request)

        token = extract_bearer_token(request.headers.get(AUTHORIZATION_HEADER))
        if token is None:
            return await call_next(request)

        codec: TokenCodec = request.app.state.token_codec
        subject = codec.verify(token)
        if isinstance(subject, Failure):
            logger.debug(
                "Ignoring unverifiable bearer token",
                extra={"reason": subject.kind.value, "path": request.url.path},
            )
            return await call_next(request)

        principal = await run_in_threadpool(self._resolve, request, subject)
        if isinstance(principal, Failure):
            logger.warning(
                "Token subject no longer resolves to a user",
                extra={"subject": subject, "path": request.url.path},
            )
            return JSONResponse(
                status_code=401,
                content={"detail": NOT_AUTHENTICATED_DETAIL},
                headers=BEARER_CHALLENGE,
            )

        request.state.principal = principal
        return await call_next(request)

    @staticmethod
    def _resolve(request: Request, subject: str) -> Principal | Failure:
        db = request.app.state.session_factory()
        try:
            return resolve_principal(SqlCredentialStore(db), subject)
        finally:
            db.close()
