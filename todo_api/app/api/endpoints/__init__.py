"""
Endpoint subpackage.

Each module defines an APIRouter for one resource (todos, tags).  The
routers are aggregated in ``api/router.py``.
"""
