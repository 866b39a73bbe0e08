"""
Create a user with explicit roles (e.g. the first admin). Run from project root:
  python -m invoice_registry.scripts.create_user NAME USERNAME EMAIL PASSWORD [ROLE ...]
Example:
  python -m invoice_registry.scripts.create_user "Site Admin" admin admin@example.com s3cret ROLE_ADMIN
Roles must already be seeded (alembic upgrade head). Defaults to DEFAULT_ROLE_NAME.
"""
import argparse
import logging
import sys

from sqlalchemy.exc import IntegrityError

from invoice_registry.core.config import get_settings
from invoice_registry.core.database import SessionLocal
from invoice_registry.core.security import PASSWORD_MAX_LEN, USERNAME_MAX_LEN, hash_password
from invoice_registry.services.credentials import SqlCredentialStore

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create an Invoice Registry user.")
    parser.add_argument("name", help="Display name")
    parser.add_argument("username", help=f"Username (1-{USERNAME_MAX_LEN} chars)")
    parser.add_argument("email", help="Email address")
    parser.add_argument("password", help=f"Password (1-{PASSWORD_MAX_LEN} chars)")
    parser.add_argument("roles", nargs="*", help="Role names, e.g. ROLE_ADMIN ROLE_USER")
    args = parser.parse_args(argv)

    username = args.username.strip()
    if not username or len(username) > USERNAME_MAX_LEN:
        logger.error("Invalid username length.")
        return 1
    if not args.password or len(args.password) > PASSWORD_MAX_LEN:
        logger.error("Password must be 1-%s characters.", PASSWORD_MAX_LEN)
        return 1
    role_names = args.roles or [get_settings().DEFAULT_ROLE_NAME]

    db = SessionLocal()
    try:
        store = SqlCredentialStore(db)
        if store.identifier_taken(username):
            logger.error("Username '%s' is already in use.", username)
            return 1
        if store.identifier_taken(args.email):
            logger.error("Email '%s' is already in use.", args.email)
            return 1
        roles = []
        for role_name in role_names:
            role = store.find_role(role_name)
            if role is None:
                logger.error("Role '%s' is not seeded; run alembic upgrade head.", role_name)
                return 1
            roles.append(role)
        try:
            user_id = store.add_user(
                name=args.name,
                username=username,
                email=args.email,
                password_hash=hash_password(args.password),
                roles=roles,
            )
        except IntegrityError:
            logger.error("User '%s' was created concurrently.", username)
            return 1
        logger.info("Created user '%s' (id=%s) with roles %s.", username, user_id, role_names)
        return 0
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
