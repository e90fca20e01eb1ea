"""
Tag query endpoints.

A tag exists as long as at least one todo carries it, so looking up a
tag nobody uses yields 404.
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from todo_api.app.api.deps import get_base_url
from todo_api.app.schemas.tag import TagRead
from todo_api.app.schemas.todo import TodoRead
from todo_api.app.services.tag_service import TagService
from todo_api.app.services.todo_service import TodoService

router = APIRouter()

NOT_FOUND = {status.HTTP_404_NOT_FOUND: {"description": "Tag not found"}}


def _not_found(tag: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Tag '{tag}' not found")


@router.get("", response_model=List[str], summary="List all tags")
async def list_tags() -> List[str]:
    """Return every tag in use, sorted and without duplicates."""
    return await TagService.list_tags()


@router.get("/{tag}", response_model=TagRead, summary="Get a specific tag", responses=NOT_FOUND)
async def get_tag(tag: str) -> dict:
    found = await TagService.get_tag(tag)
    if found is None:
        raise _not_found(tag)
    return found


@router.get(
    "/{tag}/todos",
    response_model=List[TodoRead],
    summary="List all todos with the given tag",
    responses=NOT_FOUND,
)
async def list_tagged_todos(tag: str, base_url: str = Depends(get_base_url)) -> List[dict]:
    docs = await TagService.list_tagged_todos(tag)
    if docs is None:
        raise _not_found(tag)
    return [TodoService.with_url(doc, base_url) for doc in docs]
