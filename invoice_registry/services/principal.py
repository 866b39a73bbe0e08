"""Resolve a verified token subject to the principal making the request."""

from dataclasses import dataclass

from invoice_registry.core.errors import ErrorKind, Failure
from invoice_registry.services.credentials import CredentialStore


@dataclass(frozen=True)
class Principal:
    """
    Who is making the current request.

    subject is the identifier carried by the token (username or email, as the
    client logged in with it). Built fresh for every request; never cached.
    """

    subject: str
    user_id: int
    username: str
    roles: frozenset[str]

    def has_any_role(self, names: frozenset[str]) -> bool:
        return not self.roles.isdisjoint(names)


def resolve_principal(store: CredentialStore, subject: str) -> Principal | Failure:
    """Look up subject's current roles; PRINCIPAL_NOT_FOUND if the user no longer exists."""
    credential = store.lookup(subject)
    if credential is None:
        return Failure(ErrorKind.PRINCIPAL_NOT_FOUND, f"No user for token subject {subject!r}")
    return Principal(
        subject=subject,
        user_id=credential.user_id,
        username=credential.username,
        roles=credential.roles,
    )
