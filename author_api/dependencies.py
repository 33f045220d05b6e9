"""
Author API: Request Dependencies
==================================

What:  FastAPI dependency providers wiring one request to its collaborators.
How:   Everything hangs off ``request.app.state`` (populated by ``create_app``),
       so no module-level engine, settings or service singletons exist.

Dependency Chain:
    get_db_session  → AsyncSession (rollback on error, always closed)
    get_author_store → AuthorRepository(session)      ← override in tests
    get_author_service → AuthorService(store, logger)
"""

import logging
from typing import AsyncGenerator

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from author_api.config import Settings
from author_api.repositories.author_repository import AuthorRepository, AuthorStore
from author_api.services.author_service import AuthorService


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """One transactional session per request."""
    async with request.app.state.database.session() as session:
        yield session


def get_author_store(session: AsyncSession = Depends(get_db_session)) -> AuthorStore:
    return AuthorRepository(session)


def get_author_service(
    request: Request,
    store: AuthorStore = Depends(get_author_store),
) -> AuthorService:
    logger: logging.Logger = request.app.state.logger
    return AuthorService(store, logger=logger.getChild("authors"))
