"""Builders shared by the test modules: in-memory database, codecs, clients, users."""

import base64

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from invoice_registry.api.access import ROLE_ADMIN, ROLE_USER
from invoice_registry.core.config import get_settings
from invoice_registry.core.security import hash_password
from invoice_registry.core.tokens import TokenCodec
from invoice_registry.main import create_app
from invoice_registry.models import Base, Role
from invoice_registry.services.credentials import SqlCredentialStore

SECRET_A = base64.b64decode(
    "ZGV2ZWxvcG1lbnQtb25seS1zaWduaW5nLWtleS1jaGFuZ2UtbWUtaW4tcHJvZA=="
)
SECRET_B = base64.b64decode("YW5vdGhlci1zZWNyZXQtdXNlZC1vbmx5LWJ5LXRoZS10ZXN0LXN1aXRlISE=")


def make_session_factory(seed_roles: bool = True) -> sessionmaker[Session]:
    """Fresh in-memory SQLite schema shared by every thread of the test client."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    factory = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    if seed_roles:
        with factory() as db:
            db.add_all([Role(name=ROLE_USER), Role(name=ROLE_ADMIN)])
            db.commit()
    return factory


def make_codec(ttl_ms: int = 60_000, key: bytes = SECRET_A) -> TokenCodec:
    return TokenCodec(signing_key=key, ttl_ms=ttl_ms)


def make_client(
    session_factory: sessionmaker[Session] | None = None,
    token_codec: TokenCodec | None = None,
) -> TestClient:
    app = create_app(
        settings=get_settings(),
        session_factory=session_factory or make_session_factory(),
        token_codec=token_codec or make_codec(),
    )
    return TestClient(app)


def add_user(
    session_factory: sessionmaker[Session],
    username: str,
    password: str,
    role_names: list[str],
    email: str | None = None,
    name: str | None = None,
) -> int:
    """Insert a user directly, bypassing registration (e.g. admins)."""
    with session_factory() as db:
        store = SqlCredentialStore(db)
        roles = [store.find_role(r) for r in role_names]
        return store.add_user(
            name=name or username.title(),
            username=username,
            email=email or f"{username}@example.com",
            password_hash=hash_password(password),
            roles=roles,
        )


def bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}
