"""Casefolded keyword index on projects

Revision ID: 002
Revises: 001
Create Date: 2026-10-19 12:00:00.000000

"""

import json
from collections.abc import Sequence

import sqlalchemy as sa

from alembic import op

revision: str = "002"
down_revision: str | None = "001"
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

projects = sa.table(
    "projects",
    sa.column("id", sa.Uuid()),
    sa.column("keywords", sa.JSON()),
    sa.column("keyword_index", sa.Text()),
)


def upgrade() -> None:
    op.add_column(
        "projects",
        sa.Column("keyword_index", sa.Text(), nullable=False, server_default="[]"),
    )

    # Backfill existing rows with the same serialization the ORM writes
    connection = op.get_bind()
    rows = connection.execute(sa.select(projects.c.id, projects.c.keywords)).all()
    for project_id, keywords in rows:
        connection.execute(
            projects.update()
            .where(projects.c.id == project_id)
            .values(keyword_index=json.dumps([keyword.casefold() for keyword in keywords or []]))
        )


def downgrade() -> None:
    op.drop_column("projects", "keyword_index")
