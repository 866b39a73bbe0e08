"""ASGI middleware."""

from invoice_registry.middleware.authenticator import RequestAuthenticatorMiddleware

__all__ = ["RequestAuthenticatorMiddleware"]
