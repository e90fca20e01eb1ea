"""
Service for tag queries.

Tags are derived entirely from the todos carrying them, so every
operation here is a read over the ``todos`` collection.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from starlette.concurrency import run_in_threadpool

from todo_api.app.services.todo_service import todos


class TagService:
    """Read-only queries over the tags attached to todos."""

    @classmethod
    async def list_tags(cls) -> List[str]:
        """Return every tag used by any todo, de-duplicated and sorted."""
        tags = set()
        for doc in await run_in_threadpool(todos.find):
            tags.update(doc.get("tags") or [])
        return sorted(tags)

    @classmethod
    async def get_tag(cls, tag: str) -> Optional[Dict[str, str]]:
        if await run_in_threadpool(todos.count, {"tags": tag}) == 0:
            return None
        return {"tag": tag}

    @classmethod
    async def list_tagged_todos(cls, tag: str) -> Optional[List[Dict[str, Any]]]:
        """Return the todos carrying ``tag`` sorted by ``order``, or ``None`` if there are none."""
        docs = await run_in_threadpool(todos.find, {"tags": tag}, sort="order")
        return docs or None
