"""Pydantic request/response schemas."""

from invoice_registry.schemas.auth import (
    LoginRequest,
    PrincipalResponse,
    RegisterRequest,
    RegisterResponse,
    TokenResponse,
)
from invoice_registry.schemas.customer import CustomerIn, CustomerOut
from invoice_registry.schemas.health import HealthResponse
from invoice_registry.schemas.invoice import InvoiceIn, InvoiceOut

__all__ = [
    "CustomerIn",
    "CustomerOut",
    "HealthResponse",
    "InvoiceIn",
    "InvoiceOut",
    "LoginRequest",
    "PrincipalResponse",
    "RegisterRequest",
    "RegisterResponse",
    "TokenResponse",
]
