"""
Todo endpoints.

CRUD routes for todos plus the ``/todos/{id}/tags`` sub-resource used
to attach and detach single tags.  Every todo returned carries a
``url`` pointing back at its own resource.  Unknown ids produce a 404
with a plain-text message.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from todo_api.app.api.deps import get_base_url
from todo_api.app.schemas.tag import TagCreate
from todo_api.app.schemas.todo import TodoCreate, TodoRead, TodoUpdate
from todo_api.app.services.todo_service import TodoService

router = APIRouter()

NOT_FOUND = {status.HTTP_404_NOT_FOUND: {"description": "Todo not found"}}


def _not_found(todo_id: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Todo '{todo_id}' not found")


@router.get("", response_model=List[TodoRead], summary="List all todos")
async def list_todos(
    tag: Optional[str] = Query(None, min_length=1, description="Only return todos carrying this tag"),
    base_url: str = Depends(get_base_url),
) -> List[dict]:
    """Return all todos sorted by ``order`` ascending."""
    docs = await TodoService.list_todos(tag=tag)
    return [TodoService.with_url(doc, base_url) for doc in docs]


@router.delete(
    "",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete all todos",
    responses={status.HTTP_204_NO_CONTENT: {"description": "Todos deleted"}},
)
async def delete_all_todos() -> None:
    await TodoService.delete_all()
    return None


@router.post(
    "",
    response_model=TodoRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create a todo",
)
async def create_todo(todo_in: TodoCreate, base_url: str = Depends(get_base_url)) -> dict:
    """Create a todo; ``order``, ``completed`` and ``tags`` default to 0, false and []."""
    doc = await TodoService.create_todo(todo_in)
    return TodoService.with_url(doc, base_url)


@router.get("/{todo_id}", response_model=TodoRead, summary="Get a specific todo", responses=NOT_FOUND)
async def get_todo(todo_id: str, base_url: str = Depends(get_base_url)) -> dict:
    doc = await TodoService.get_todo(todo_id)
    if doc is None:
        raise _not_found(todo_id)
    return TodoService.with_url(doc, base_url)


@router.patch("/{todo_id}", response_model=TodoRead, summary="Update a todo", responses=NOT_FOUND)
async def update_todo(
    todo_id: str,
    todo_in: TodoUpdate,
    base_url: str = Depends(get_base_url),
) -> dict:
    """Replace the fields present in the body; absent fields keep their values."""
    doc = await TodoService.update_todo(todo_id, todo_in)
    if doc is None:
        raise _not_found(todo_id)
    return TodoService.with_url(doc, base_url)


@router.delete(
    "/{todo_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a todo",
    responses={status.HTTP_204_NO_CONTENT: {"description": "Todo deleted"}, **NOT_FOUND},
)
async def delete_todo(todo_id: str) -> None:
    deleted = await TodoService.delete_todo(todo_id)
    if not deleted:
        raise _not_found(todo_id)
    return None


@router.get(
    "/{todo_id}/tags",
    response_model=List[str],
    summary="Get the tags of a specific todo",
    responses=NOT_FOUND,
)
async def get_todo_tags(todo_id: str) -> List[str]:
    tags = await TodoService.get_tags(todo_id)
    if tags is None:
        raise _not_found(todo_id)
    return tags


@router.post(
    "/{todo_id}/tags",
    response_model=List[str],
    summary="Add a tag to a todo",
    responses=NOT_FOUND,
)
async def add_todo_tag(todo_id: str, tag_in: TagCreate) -> List[str]:
    """Attach a tag; adding a tag the todo already carries changes nothing."""
    tags = await TodoService.add_tag(todo_id, tag_in.tag)
    if tags is None:
        raise _not_found(todo_id)
    return tags


@router.delete(
    "/{todo_id}/tags/{tag}",
    response_model=List[str],
    summary="Remove a tag from a todo",
    responses=NOT_FOUND,
)
async def remove_todo_tag(todo_id: str, tag: str) -> List[str]:
    tags = await TodoService.remove_tag(todo_id, tag)
    if tags is None:
        raise _not_found(todo_id)
    return tags
