"""Shared FastAPI dependencies resolved from application state."""

from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from invoice_registry.core.config import Settings
from invoice_registry.core.database import get_db
from invoice_registry.core.tokens import TokenCodec
from invoice_registry.services.credentials import SqlCredentialStore


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_token_codec(request: Request) -> TokenCodec:
    return request.app.state.token_codec


def get_credential_store(db: Annotated[Session, Depends(get_db)]) -> SqlCredentialStore:
    return SqlCredentialStore(db)
