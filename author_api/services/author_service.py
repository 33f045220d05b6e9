"""
Author API: Author Service (Business Logic)
=============================================

What:  Orchestrates one storage call per author operation.
How:   Calls the injected ``AuthorStore``, maps rows to ``AuthorResponse``,
       turns storage absence into ``NotFoundError`` and database failures
       into ``StorageError``.
Who:   Built per request by the route dependency; called by the handlers.

Error Handling Strategy:
    SQLAlchemyError      → logged, re-raised as StorageError("error <op>: <cause>")
    row absent (None)    → NotFoundError (get, replace, partial_update)
    delete of absent id  → success; the absence is only logged at DEBUG

No retries and no caching: every call is one synchronous round-trip to
the store.
"""

import logging
from typing import List, NoReturn, Optional

from sqlalchemy.exc import SQLAlchemyError

from author_api.exceptions import NotFoundError, StorageError
from author_api.mapper import to_response
from author_api.repositories.author_repository import (
    AuthorStore,
    CreateAuthorCommand,
    PartialUpdateAuthorCommand,
    ReplaceAuthorCommand,
)
from author_api.schemas.author import AuthorResponse

RESOURCE = "author"


class AuthorService:
    """
    Business logic layer for author operations.

    Attributes:
        store:   Storage contract implementation (SQL repository or a test fake)
        logger:  Logger used for failure and audit messages
    """

    def __init__(self, store: AuthorStore, logger: Optional[logging.Logger] = None):
        self.store = store
        self.logger = logger or logging.getLogger(__name__)

    def _storage_failure(self, operation: str, exc: SQLAlchemyError, **context) -> NoReturn:
        error = StorageError(operation, cause=exc, context=context)
        self.logger.error("%s", error.message, exc_info=True)
        raise error from exc

    async def create(self, cmd: CreateAuthorCommand) -> AuthorResponse:
        try:
            row = await self.store.create(cmd)
        except SQLAlchemyError as e:
            self._storage_failure("creating author", e)
        self.logger.info("Author %s created", row.id)
        return to_response(row)

    async def get(self, author_id: int) -> AuthorResponse:
        """
        Fetch one author.

        Raises:
            NotFoundError: No row with ``author_id``
            StorageError:  Query execution failed
        """
        try:
            row = await self.store.get(author_id)
        except SQLAlchemyError as e:
            self._storage_failure("getting author", e, author_id=author_id)
        if row is None:
            raise NotFoundError(resource=RESOURCE, resource_id=author_id)
        return to_response(row)

    async def replace(self, cmd: ReplaceAuthorCommand) -> AuthorResponse:
        try:
            row = await self.store.replace(cmd)
        except SQLAlchemyError as e:
            self._storage_failure("replacing author", e, author_id=cmd.id)
        if row is None:
            raise NotFoundError(resource=RESOURCE, resource_id=cmd.id)
        self.logger.info("Author %s replaced", row.id)
        return to_response(row)

    async def partial_update(self, cmd: PartialUpdateAuthorCommand) -> AuthorResponse:
        """
        Apply a presence-flagged update.

        A command with no flags set still goes to the store, which returns
        the unchanged row (or reports absence).
        """
        if cmd.is_empty:
            self.logger.debug("Partial update of author %s carries no fields", cmd.id)
        try:
            row = await self.store.partial_update(cmd)
        except SQLAlchemyError as e:
            self._storage_failure("updating author", e, author_id=cmd.id)
        if row is None:
            raise NotFoundError(resource=RESOURCE, resource_id=cmd.id)
        self.logger.info(
            "Author %s updated (name=%s, bio=%s)", row.id, cmd.update_name, cmd.update_bio
        )
        return to_response(row)

    async def delete(self, author_id: int) -> None:
        """Delete one author. Deleting a missing id is not an error."""
        try:
            deleted = await self.store.delete(author_id)
        except SQLAlchemyError as e:
            self._storage_failure("deleting author", e, author_id=author_id)
        if deleted:
            self.logger.info("Author %s deleted", author_id)
        else:
            self.logger.debug("Delete of author %s matched no row", author_id)

    async def list(self) -> List[AuthorResponse]:
        try:
            rows = await self.store.list()
        except SQLAlchemyError as e:
            self._storage_failure("listing authors", e)
        return [to_response(row) for row in rows]

    async def truncate(self) -> None:
        """Remove every author. Not exposed over HTTP."""
        try:
            await self.store.truncate()
        except SQLAlchemyError as e:
            self._storage_failure("truncating authors", e)
        self.logger.warning("Authors table truncated")
