"""
Route-level access policy.

Each route declares one rule: open to anyone, open to any authenticated
principal, or restricted to a set of role names. Rules are evaluated against
the principal the request authenticator attached to request.state, and are
exposed as FastAPI dependencies:

    @router.post("")
    def create(principal: Annotated[Principal, Depends(require_admin)]): ...

CORS preflight (OPTIONS) requests and the API documentation routes are always
admitted regardless of the declared rule.

Every API route must declare a rule, including open ones (require_open);
create_app() refuses to start when a route has none.
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Literal

from fastapi import FastAPI, Request
from fastapi.dependencies.models import Dependant
from fastapi.routing import APIRoute

from invoice_registry.api.errors import raise_for_failure
from invoice_registry.core.errors import ErrorKind, Failure
from invoice_registry.services.principal import Principal

ROLE_USER = "ROLE_USER"
ROLE_ADMIN = "ROLE_ADMIN"

DOCUMENTATION_PATHS = frozenset({"/docs", "/docs/oauth2-redirect", "/redoc", "/openapi.json"})


def is_exempt(method: str, path: str) -> bool:
    """True for requests that are open independent of any route's rule."""
    return method.upper() == "OPTIONS" or path in DOCUMENTATION_PATHS


def get_principal(request: Request) -> Principal | None:
    """The principal attached to this request, or None for anonymous requests."""
    return getattr(request.state, "principal", None)


@dataclass(frozen=True)
class AccessRule:
    """What a route requires of the caller."""

    mode: Literal["open", "authenticated", "roles"]
    roles: frozenset[str] = field(default_factory=frozenset)

    def evaluate(self, principal: Principal | None) -> Failure | None:
        """None to admit; UNAUTHENTICATED or FORBIDDEN to reject."""
        if self.mode == "open":
            return None
        if principal is None:
            return Failure(ErrorKind.UNAUTHENTICATED, "No authenticated principal")
        if self.mode == "authenticated":
            return None
        if principal.has_any_role(self.roles):
            return None
        return Failure(
            ErrorKind.FORBIDDEN,
            f"{principal.username} lacks any of {sorted(self.roles)}",
        )


OPEN = AccessRule("open")
AUTHENTICATED = AccessRule("authenticated")


def any_role(*names: str) -> AccessRule:
    """Rule admitting principals holding at least one of names."""
    if not names:
        raise ValueError("any_role() needs at least one role name")
    return AccessRule("roles", frozenset(names))


def require(rule: AccessRule) -> Callable[[Request], Principal | None]:
    """Build a dependency that enforces rule and returns the request's principal."""

    def dependency(request: Request) -> Principal | None:
        principal = get_principal(request)
        if is_exempt(request.method, request.url.path):
            return principal
        failure = rule.evaluate(principal)
        if failure is not None:
            raise_for_failure(failure)
        return principal

    dependency.access_rule = rule  # type: ignore[attr-defined]
    return dependency


require_open = require(OPEN)
require_authenticated = require(AUTHENTICATED)
require_user_or_admin = require(any_role(ROLE_ADMIN, ROLE_USER))
require_admin = require(any_role(ROLE_ADMIN))


def _declares_rule(dependant: Dependant) -> bool:
    return any(
        hasattr(dep.call, "access_rule") or _declares_rule(dep) for dep in dependant.dependencies
    )


def unguarded_routes(app: FastAPI) -> list[str]:
    """'METHOD path' of every API route that declares no access rule."""
    return [
        f"{','.join(sorted(route.methods))} {route.path}"
        for route in app.routes
        if isinstance(route, APIRoute) and not _declares_rule(route.dependant)
    ]
