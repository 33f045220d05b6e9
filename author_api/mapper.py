"""
Author API: Entity Mapper
===========================

Pure conversions between the wire schemas and the storage commands/rows.
No I/O and no state.
"""

from author_api.models.author import Author
from author_api.repositories.author_repository import (
    CreateAuthorCommand,
    PartialUpdateAuthorCommand,
    ReplaceAuthorCommand,
)
from author_api.schemas.author import (
    AuthorCreate,
    AuthorPatch,
    AuthorReplace,
    AuthorResponse,
)


def to_create_command(body: AuthorCreate) -> CreateAuthorCommand:
    return CreateAuthorCommand(name=body.name, bio=body.bio)


def to_replace_command(author_id: int, body: AuthorReplace) -> ReplaceAuthorCommand:
    return ReplaceAuthorCommand(id=author_id, name=body.name, bio=body.bio)


def to_partial_update_command(author_id: int, body: AuthorPatch) -> PartialUpdateAuthorCommand:
    """
    Flag each field the client actually supplied.

    A field counts as supplied when it appears in the JSON body with a
    non-null value. Omitted and ``null`` fields stay unflagged, so the
    stored column keeps its current value.
    """
    supplied = body.model_fields_set
    update_name = "name" in supplied and body.name is not None
    update_bio = "bio" in supplied and body.bio is not None
    return PartialUpdateAuthorCommand(
        id=author_id,
        name=body.name if update_name else None,
        update_name=update_name,
        bio=body.bio if update_bio else None,
        update_bio=update_bio,
    )


def to_response(row: Author) -> AuthorResponse:
    return AuthorResponse(id=row.id, name=row.name, bio=row.bio)
