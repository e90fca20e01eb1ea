"""
Top-level package for the Todo API.

All functionality lives in submodules under ``app``; the ASGI
application is ``todo_api.app.main:app``.
"""

__all__ = []
