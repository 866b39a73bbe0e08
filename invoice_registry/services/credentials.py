"""Credential store: lookup of users by login identifier, and user persistence.

Usernames and emails share one identifier space: a new username may not equal
any stored username or email, and likewise for a new email. A login
identifier therefore names at most one user.
"""

import logging
from dataclasses import dataclass
from typing import Protocol

from sqlalchemy import or_
from sqlalchemy.orm import Session

from invoice_registry.models import Role, User

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StoredCredential:
    """What login and request authentication need to know about a stored user."""

    user_id: int
    username: str
    password_hash: str
    roles: frozenset[str]


class CredentialStore(Protocol):
    """Capabilities the authentication core needs from user storage."""

    def lookup(self, identifier: str) -> StoredCredential | None:
        """Find the one user whose username or email equals identifier."""
        ...

    def identifier_taken(self, identifier: str) -> bool:
        """True if identifier is any stored user's username or email."""
        ...

    def find_role(self, name: str) -> Role | None: ...

    def add_user(
        self,
        name: str,
        username: str,
        email: str,
        password_hash: str,
        roles: list[Role],
    ) -> int:
        """Persist a new user and return its generated id.

        Raises sqlalchemy.exc.IntegrityError if a unique index is violated;
        the transaction has already been rolled back when it propagates.
        """
        ...


class SqlCredentialStore:
    """CredentialStore backed by the users/roles tables of one Session."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def _find_user(self, identifier: str) -> User | None:
        matches = (
            self.db.query(User)
            .filter(or_(User.username == identifier, User.email == identifier))
            .order_by(User.id)
            .limit(2)
            .all()
        )
        if len(matches) > 1:
            # Only rows written before cross-column checks existed can collide.
            logger.error(
                "Login identifier matches more than one user",
                extra={"user_ids": [user.id for user in matches]},
            )
            return None
        return matches[0] if matches else None

    def lookup(self, identifier: str) -> StoredCredential | None:
        user = self._find_user(identifier)
        if user is None:
            return None
        return StoredCredential(
            user_id=user.id,
            username=user.username,
            password_hash=user.password_hash,
            roles=user.role_names,
        )

    def identifier_taken(self, identifier: str) -> bool:
        return (
            self.db.query(User.id)
            .filter(or_(User.username == identifier, User.email == identifier))
            .first()
            is not None
        )

    def find_role(self, name: str) -> Role | None:
        return self.db.query(Role).filter(Role.name == name).first()

    def add_user(
        self,
        name: str,
        username: str,
        email: str,
        password_hash: str,
        roles: list[Role],
    ) -> int:
        user = User(
            name=name,
            username=username,
            email=email,
            password_hash=password_hash,
            roles=list(roles),
        )
        self.db.add(user)
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(user)
        return user.id
