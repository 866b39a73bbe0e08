"""Registration, login and the current principal."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from invoice_registry.api.access import require_authenticated, require_open
from invoice_registry.api.deps import get_app_settings, get_credential_store, get_token_codec
from invoice_registry.api.errors import raise_for_failure
from invoice_registry.core.config import Settings
from invoice_registry.core.errors import Failure
from invoice_registry.core.tokens import TokenCodec
from invoice_registry.schemas.auth import (
    LoginRequest,
    PrincipalResponse,
    RegisterRequest,
    RegisterResponse,
    TokenResponse,
)
from invoice_registry.services import auth as auth_service
from invoice_registry.services.credentials import SqlCredentialStore
from invoice_registry.services.principal import Principal

router = APIRouter()


@router.post(
    "/register",
    response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_open)],
)
def register(
    body: RegisterRequest,
    store: Annotated[SqlCredentialStore, Depends(get_credential_store)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> RegisterResponse:
    """
    Create an account with the default role.
    Returns 400 if the username or email is already in use.
    """
    result = auth_service.register(
        store,
        settings.DEFAULT_ROLE_NAME,
        name=body.name,
        username=body.username,
        email=str(body.email),
        password=body.password,
    )
    if isinstance(result, Failure):
        raise_for_failure(result)
    return RegisterResponse(message=result)


@router.post("/login", response_model=TokenResponse, dependencies=[Depends(require_open)])
def login(
    body: LoginRequest,
    store: Annotated[SqlCredentialStore, Depends(get_credential_store)],
    codec: Annotated[TokenCodec, Depends(get_token_codec)],
) -> TokenResponse:
    """
    Authenticate with username or email and password; returns a JWT access token.
    Include the token in the Authorization header as: Bearer <accessToken>
    """
    result = auth_service.login(store, codec, body.username_or_email, body.password)
    if isinstance(result, Failure):
        raise_for_failure(result)
    return TokenResponse(
        access_token=result.access_token,
        token_type=result.token_type,
        role=result.role,
    )


@router.get("/me", response_model=PrincipalResponse)
def me(
    principal: Annotated[Principal, Depends(require_authenticated)],
) -> PrincipalResponse:
    """The caller's identity and roles; any authenticated user."""
    return PrincipalResponse(
        subject=principal.subject,
        username=principal.username,
        roles=sorted(principal.roles),
    )
