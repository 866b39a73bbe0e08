"""SQLAlchemy ORM models."""

from invoice_registry.models.base import Base
from invoice_registry.models.customer import Customer
from invoice_registry.models.invoice import Invoice
from invoice_registry.models.user import Role, User, users_roles

__all__ = ["Base", "Customer", "Invoice", "Role", "User", "users_roles"]
