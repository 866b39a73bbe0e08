"""Registration and login: credential checks, default role assignment, token issue."""

import logging
from dataclasses import dataclass
from datetime import datetime

from sqlalchemy.exc import IntegrityError

from invoice_registry.core.errors import ErrorKind, Failure
from invoice_registry.core.security import check_credentials, hash_password
from invoice_registry.core.tokens import TokenCodec
from invoice_registry.services.credentials import CredentialStore
from invoice_registry.services.principal import Principal, resolve_principal

logger = logging.getLogger(__name__)

TOKEN_TYPE = "Bearer"


@dataclass(frozen=True)
class LoginResult:
    """Issued token plus one representative role of the logged-in user."""

    access_token: str
    role: str | None
    token_type: str = TOKEN_TYPE


def _duplicate_failure(store: CredentialStore, username: str, email: str) -> Failure | None:
    # Username is checked before email; each against both stored columns.
    if store.identifier_taken(username):
        return Failure(ErrorKind.DUPLICATE_USERNAME, f"Username {username} is already in use")
    if store.identifier_taken(email):
        return Failure(ErrorKind.DUPLICATE_EMAIL, f"Email {email} is already in use")
    return None


def register(
    store: CredentialStore,
    default_role_name: str,
    name: str,
    username: str,
    email: str,
    password: str,
) -> str | Failure:
    """
    Create a user with exactly the default role; return a confirmation message.

    Failures: DUPLICATE_USERNAME, DUPLICATE_EMAIL (also when a concurrent
    registration wins the unique index race), ROLE_SEED_MISSING when the
    default role has not been provisioned.
    """
    duplicate = _duplicate_failure(store, username, email)
    if duplicate is not None:
        return duplicate

    role = store.find_role(default_role_name)
    if role is None:
        logger.error(
            "Default role is not seeded; registration is unavailable",
            extra={"role_name": default_role_name},
        )
        return Failure(ErrorKind.ROLE_SEED_MISSING, f"Role {default_role_name} not found")

    try:
        user_id = store.add_user(
            name=name,
            username=username,
            email=email,
            password_hash=hash_password(password),
            roles=[role],
        )
    except IntegrityError:
        duplicate = _duplicate_failure(store, username, email)
        if duplicate is None:
            raise
        logger.info("Registration lost a uniqueness race", extra={"username": username})
        return duplicate

    logger.info("User registered", extra={"user_id": user_id, "username": username})
    return f"User {name} successfully registered"


def representative_role(principal: Principal) -> str | None:
    """
    One role name for the login response: the first in sorted order, or None.

    Only one role is reported even when several are assigned.
    """
    return min(principal.roles) if principal.roles else None


def login(
    store: CredentialStore,
    codec: TokenCodec,
    username_or_email: str,
    password: str,
    now: datetime | None = None,
) -> LoginResult | Failure:
    """
    Check the password for username_or_email and issue a token for it.

    An unknown identifier and a wrong password both return BAD_CREDENTIALS.
    The token subject is the identifier exactly as supplied.
    """
    credential = store.lookup(username_or_email)
    stored_hash = credential.password_hash if credential is not None else None
    if not check_credentials(stored_hash, password):
        logger.info("Login rejected", extra={"identifier": username_or_email})
        return Failure(ErrorKind.BAD_CREDENTIALS, "Invalid username or password")

    principal = resolve_principal(store, username_or_email)
    if isinstance(principal, Failure):
        # Deleted between the credential check and principal resolution.
        return Failure(ErrorKind.BAD_CREDENTIALS, "Invalid username or password")

    token = codec.issue(username_or_email, now)
    logger.info("Login succeeded", extra={"user_id": principal.user_id})
    return LoginResult(access_token=token, role=representative_role(principal))
