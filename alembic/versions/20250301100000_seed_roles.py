"""Seed the ROLE_USER and ROLE_ADMIN reference roles.

Registration assigns ROLE_USER; the API refuses to register users until it exists.

Revision ID: 20250301100000
Revises: 20250301000000
Create Date: 2025-03-01

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "20250301100000"
down_revision: Union[str, None] = "20250301000000"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

SEEDED_ROLES = ("ROLE_USER", "ROLE_ADMIN")

roles_table = sa.table(
    "roles",
    sa.column("id", sa.Integer()),
    sa.column("name", sa.String(length=64)),
)


def upgrade() -> None:
    op.bulk_insert(roles_table, [{"name": name} for name in SEEDED_ROLES])


def downgrade() -> None:
    op.execute(roles_table.delete().where(roles_table.c.name.in_(SEEDED_ROLES)))
