"""
Author API: Author Route Handlers
===================================

What:  The six /authors endpoints.
How:   FastAPI binds and validates path ids and JSON bodies (failures become
       400 through the global handler), the mapper builds storage commands,
       and ``AuthorService`` performs the single storage call.

Endpoint Inventory:
    POST   /authors        → 201 created author
    GET    /authors/{id}   → 200 author | 404 (204 in legacy mode)
    PUT    /authors/{id}   → 200 author | 404
    PATCH  /authors/{id}   → 200 author | 404
    DELETE /authors/{id}   → 204 (also when the id does not exist)
    GET    /authors        → 200 list (empty list → 204 in legacy mode)
"""

from typing import Annotated, List, Union

from fastapi import APIRouter, Depends, Path, Response, status

from author_api import mapper
from author_api.config import Settings
from author_api.dependencies import get_author_service, get_settings
from author_api.exceptions import NotFoundError
from author_api.schemas.author import (
    AuthorCreate,
    AuthorPatch,
    AuthorReplace,
    AuthorResponse,
    ErrorResponse,
)
from author_api.services.author_service import AuthorService

INT64_MAX = 2**63 - 1

router = APIRouter(prefix="/authors", tags=["Authors"])

AuthorId = Annotated[
    int, Path(ge=1, le=INT64_MAX, description="Author identifier (64-bit integer)")
]

_errors = {
    400: {"description": "Validation failed", "model": ErrorResponse},
    500: {"description": "Storage failure", "model": ErrorResponse},
}
_not_found = {404: {"description": "Author not found", "model": ErrorResponse}}


@router.post(
    "",
    response_model=AuthorResponse,
    status_code=status.HTTP_201_CREATED,
    responses=_errors,
    summary="Create an author",
)
async def create_author(
    body: AuthorCreate,
    service: AuthorService = Depends(get_author_service),
) -> AuthorResponse:
    return await service.create(mapper.to_create_command(body))


@router.get(
    "/{author_id}",
    response_model=AuthorResponse,
    responses={**_errors, **_not_found, 204: {"description": "Not found (legacy mode)"}},
    summary="Get an author by ID",
)
async def get_author(
    author_id: AuthorId,
    service: AuthorService = Depends(get_author_service),
    settings: Settings = Depends(get_settings),
) -> Union[AuthorResponse, Response]:
    """
    Return one author.

    With ``legacy_no_content`` enabled, absence answers 204 with no body
    instead of 404.
    """
    try:
        return await service.get(author_id)
    except NotFoundError:
        if settings.legacy_no_content:
            return Response(status_code=status.HTTP_204_NO_CONTENT)
        raise


@router.put(
    "/{author_id}",
    response_model=AuthorResponse,
    responses={**_errors, **_not_found},
    summary="Replace an author",
)
async def replace_author(
    body: AuthorReplace,
    author_id: AuthorId,
    service: AuthorService = Depends(get_author_service),
) -> AuthorResponse:
    return await service.replace(mapper.to_replace_command(author_id, body))


@router.patch(
    "/{author_id}",
    response_model=AuthorResponse,
    responses={**_errors, **_not_found},
    summary="Partially update an author",
    description="Only the fields present in the body are written; omitted fields keep their value.",
)
async def patch_author(
    body: AuthorPatch,
    author_id: AuthorId,
    service: AuthorService = Depends(get_author_service),
) -> AuthorResponse:
    return await service.partial_update(mapper.to_partial_update_command(author_id, body))


@router.delete(
    "/{author_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses=_errors,
    summary="Delete an author",
)
async def delete_author(
    author_id: AuthorId,
    service: AuthorService = Depends(get_author_service),
) -> Response:
    await service.delete(author_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get(
    "",
    response_model=List[AuthorResponse],
    responses={500: _errors[500], 204: {"description": "No authors (legacy mode)"}},
    summary="List all authors",
)
async def list_authors(
    service: AuthorService = Depends(get_author_service),
    settings: Settings = Depends(get_settings),
) -> Union[List[AuthorResponse], Response]:
    authors = await service.list()
    if not authors and settings.legacy_no_content:
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    return authors
