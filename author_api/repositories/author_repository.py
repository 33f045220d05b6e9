"""
Repository for the Author table.

``AuthorStore`` is the storage contract the service layer depends on; it is
the one seam in the application meant to be substituted (the test suite
injects an in-memory implementation). ``AuthorRepository`` implements it on
an ``AsyncSession``.

Every method issues exactly one SQL statement, and the writing methods
commit before returning, so a failed COMMIT surfaces from the same call as
the statement. Absence is reported as ``None`` (or ``False`` for delete),
never as an exception. Database failures propagate as ``SQLAlchemyError``.

Example:
    ```python
    async with database.session() as session:
        repo = AuthorRepository(session)
        created = await repo.create(CreateAuthorCommand(name="A", bio="B"))
        same = await repo.get(created.id)
    ```
"""

from dataclasses import dataclass
from typing import List, Optional, Protocol

from sqlalchemy import Boolean, case, delete, literal, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from author_api.models.author import Author


@dataclass(frozen=True)
class CreateAuthorCommand:
    name: str
    bio: str


@dataclass(frozen=True)
class ReplaceAuthorCommand:
    id: int
    name: str
    bio: str


@dataclass(frozen=True)
class PartialUpdateAuthorCommand:
    """
    Column-wise update of one author.

    ``update_name`` / ``update_bio`` say whether the matching value should be
    written. An unflagged value is ignored, whatever it holds.
    """

    id: int
    name: Optional[str] = None
    update_name: bool = False
    bio: Optional[str] = None
    update_bio: bool = False

    @property
    def is_empty(self) -> bool:
        return not (self.update_name or self.update_bio)


class AuthorStore(Protocol):
    """Storage operations consumed by ``AuthorService``."""

    async def create(self, cmd: CreateAuthorCommand) -> Author: ...

    async def get(self, author_id: int) -> Optional[Author]: ...

    async def replace(self, cmd: ReplaceAuthorCommand) -> Optional[Author]: ...

    async def partial_update(self, cmd: PartialUpdateAuthorCommand) -> Optional[Author]: ...

    async def delete(self, author_id: int) -> bool: ...

    async def list(self) -> List[Author]: ...

    async def truncate(self) -> None: ...


class AuthorRepository:
    """
    SQLAlchemy implementation of ``AuthorStore``.

    Attributes:
        session: The request-scoped session. Writes are committed here;
                 ``Database.session()`` rolls back and closes.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, cmd: CreateAuthorCommand) -> Author:
        author = Author(name=cmd.name, bio=cmd.bio)
        self.session.add(author)
        await self.session.commit()
        return author

    async def get(self, author_id: int) -> Optional[Author]:
        result = await self.session.execute(
            select(Author).where(Author.id == author_id)
        )
        return result.scalar_one_or_none()

    async def replace(self, cmd: ReplaceAuthorCommand) -> Optional[Author]:
        result = await self.session.execute(
            update(Author)
            .where(Author.id == cmd.id)
            .values(name=cmd.name, bio=cmd.bio)
            .returning(Author)
        )
        author = result.scalar_one_or_none()
        await self.session.commit()
        return author

    async def partial_update(self, cmd: PartialUpdateAuthorCommand) -> Optional[Author]:
        """
        Overwrite only the flagged columns.

        Emits:
            UPDATE authors
               SET name = CASE WHEN :update_name THEN :name ELSE name END,
                   bio  = CASE WHEN :update_bio  THEN :bio  ELSE bio  END
             WHERE id = :id
            RETURNING id, name, bio
        """
        result = await self.session.execute(
            update(Author)
            .where(Author.id == cmd.id)
            .values(
                name=case(
                    (literal(cmd.update_name, Boolean), literal(cmd.name, Author.name.type)),
                    else_=Author.name,
                ),
                bio=case(
                    (literal(cmd.update_bio, Boolean), literal(cmd.bio, Author.bio.type)),
                    else_=Author.bio,
                ),
            )
            .returning(Author)
            .execution_options(synchronize_session="fetch")
        )
        author = result.scalar_one_or_none()
        await self.session.commit()
        return author

    async def delete(self, author_id: int) -> bool:
        result = await self.session.execute(
            delete(Author).where(Author.id == author_id)
        )
        await self.session.commit()
        return result.rowcount > 0

    async def list(self) -> List[Author]:
        result = await self.session.execute(select(Author).order_by(Author.id))
        return list(result.scalars().all())

    async def truncate(self) -> None:
        # DELETE rather than TRUNCATE: SQLite has no TRUNCATE statement
        await self.session.execute(delete(Author))
        await self.session.commit()
