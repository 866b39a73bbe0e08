"""Core configuration, database, security, tokens and failure values."""

from invoice_registry.core.config import get_settings, settings
from invoice_registry.core.database import get_db
from invoice_registry.core.errors import ErrorKind, Failure

__all__ = ["ErrorKind", "Failure", "get_db", "get_settings", "settings"]
