"""create books table

Revision ID: 3c1d9a7e52b4
Revises:
Create Date: 2026-10-17 09:12:44.318204

"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "3c1d9a7e52b4"
down_revision: str | Sequence[str] | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "books",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column("author", sa.Text(), nullable=False),
        sa.Column("publication_date", sa.Date(), nullable=False),
        sa.Column("price", sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column("title_folded", sa.Text(), nullable=False),
        sa.Column("author_folded", sa.Text(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sqlite_autoincrement=True,
    )
    op.create_index("ix_books_author_title", "books", ["author", "title"], unique=False)


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("ix_books_author_title", table_name="books")
    op.drop_table("books")
