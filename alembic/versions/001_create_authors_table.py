"""Create authors table

Revision ID: 001
Revises: None
Create Date: 2026-10-19 00:00:00.000000+00:00

What:  Creates the ``authors`` table backing the /authors endpoints.
Rollback: downgrade() drops the table (destructive, all rows lost).
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create the authors table. See author_api/models/author.py for the model."""
    op.create_table(
        "authors",

        # Identity primary key assigned by the database
        sa.Column(
            "id",
            sa.BigInteger().with_variant(sa.Integer(), "sqlite"),
            autoincrement=True,
            nullable=False,
        ),

        # Display name, at most 32 characters
        sa.Column("name", sa.String(32), nullable=False),

        sa.Column("bio", sa.Text(), nullable=False),

        sa.PrimaryKeyConstraint("id"),
    )


def downgrade() -> None:
    op.drop_table("authors")
