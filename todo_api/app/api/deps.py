"""Shared dependencies for API routes."""

from fastapi import Request

from todo_api.app.core.config import settings


def get_base_url(request: Request) -> str:
    """Return the base URI used to build resource URLs.

    ``PUBLIC_URL`` wins when configured (e.g. behind a reverse proxy);
    otherwise the base URL of the incoming request is used.
    """
    return (settings.public_url or str(request.base_url)).rstrip("/")
