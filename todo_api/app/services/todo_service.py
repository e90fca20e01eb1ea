"""
Service layer for todos.

Each method performs one or two document-store operations on the
``todos`` collection and returns plain documents (dicts carrying an
``_id``).  Missing todos are reported as ``None`` (or ``False`` for
deletion) so the API layer can decide on the HTTP status.  Store errors
are not caught here.  Store calls block, so they run in the threadpool.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from starlette.concurrency import run_in_threadpool

from todo_api.app.core.db import Collection
from todo_api.app.schemas.todo import TodoCreate, TodoUpdate


logger = logging.getLogger(__name__)

todos = Collection("todos")


class TodoService:
    """Service class for creating, querying and modifying todos."""

    @staticmethod
    def with_url(doc: Dict[str, Any], base_url: str) -> Dict[str, Any]:
        """Annotate a todo document with its resource URL."""
        return {**doc, "url": f"{base_url.rstrip('/')}/todos/{doc['_id']}"}

    @classmethod
    async def list_todos(cls, tag: Optional[str] = None) -> List[Dict[str, Any]]:
        """Return all todos sorted by ``order``, optionally only those carrying ``tag``."""
        query = {} if tag is None else {"tags": tag}
        return await run_in_threadpool(todos.find, query, sort="order")

    @classmethod
    async def delete_all(cls) -> int:
        removed = await run_in_threadpool(todos.remove_all)
        logger.info("Deleted all todos (%s removed)", removed)
        return removed

    @classmethod
    async def create_todo(cls, data: TodoCreate) -> Dict[str, Any]:
        """Insert a new todo; defaults for missing fields come from ``TodoCreate``."""
        doc = await run_in_threadpool(
            todos.insert,
            {
                "title": data.title,
                "order": data.order,
                "completed": data.completed,
                "tags": data.tags,
            },
        )
        logger.info("Created todo %s", doc["_id"])
        return doc

    @classmethod
    async def get_todo(cls, todo_id: str) -> Optional[Dict[str, Any]]:
        return await run_in_threadpool(todos.find_one, todo_id)

    @classmethod
    async def update_todo(cls, todo_id: str, data: TodoUpdate) -> Optional[Dict[str, Any]]:
        """Replace the fields present in ``data``.

        Returns the updated todo or ``None`` if it does not exist.
        """
        changes = data.changes()
        doc = await run_in_threadpool(todos.update, todo_id, changes)
        if doc is not None:
            logger.info("Updated todo %s (%s)", todo_id, ", ".join(sorted(changes)) or "no changes")
        return doc

    @classmethod
    async def delete_todo(cls, todo_id: str) -> bool:
        """Delete a todo.  Returns ``True`` if it existed."""
        removed = await run_in_threadpool(todos.remove, todo_id)
        if removed:
            logger.info("Deleted todo %s", todo_id)
        return bool(removed)

    @classmethod
    async def get_tags(cls, todo_id: str) -> Optional[List[str]]:
        doc = await run_in_threadpool(todos.find_one, todo_id)
        return None if doc is None else doc.get("tags", [])

    @classmethod
    async def add_tag(cls, todo_id: str, tag: str) -> Optional[List[str]]:
        """Attach ``tag`` unless already present; returns the resulting tags."""
        doc = await run_in_threadpool(todos.add_to_set, todo_id, "tags", tag)
        if doc is None:
            return None
        logger.info("Tagged todo %s with %r", todo_id, tag)
        return doc.get("tags", [])

    @classmethod
    async def remove_tag(cls, todo_id: str, tag: str) -> Optional[List[str]]:
        """Detach ``tag``; a tag the todo does not carry is a no-op."""
        doc = await run_in_threadpool(todos.pull, todo_id, "tags", tag)
        if doc is None:
            return None
        logger.info("Removed tag %r from todo %s", tag, todo_id)
        return doc.get("tags", [])
