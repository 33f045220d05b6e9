"""
Author API: Author SQLAlchemy Model
=====================================

What:  ORM model representing the ``authors`` table.
How:   Inherits from the shared DeclarativeBase; Alembic reads it for migrations.
Who:   Used by SQLAuthorStore for every statement and by the mapper for responses.

Table Design:
    - BIGINT identity primary key, assigned by the database on insert
    - name: VARCHAR(32), NOT NULL
    - bio:  TEXT, NOT NULL
"""

from sqlalchemy import BigInteger, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from author_api.database import Base

NAME_MAX_LENGTH = 32


class Author(Base):
    """
    A persisted author row.

    Lifecycle:
        1. Created by INSERT (database assigns ``id``)
        2. Overwritten wholesale by a replace, or column-by-column by a partial update
        3. Hard-deleted; no tombstone is kept
    """

    __tablename__ = "authors"

    # SQLite only auto-increments an ``INTEGER PRIMARY KEY`` column
    id: Mapped[int] = mapped_column(
        BigInteger().with_variant(Integer, "sqlite"),
        primary_key=True,
        autoincrement=True,
    )

    name: Mapped[str] = mapped_column(
        String(NAME_MAX_LENGTH),
        nullable=False,
    )

    bio: Mapped[str] = mapped_column(
        Text,
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<Author(id={self.id}, name='{self.name}')>"
