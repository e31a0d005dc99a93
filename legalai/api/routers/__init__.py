"""
API routers.

Exports one APIRouter per resource, mounted under /api/v1 by create_app.
"""

from legalai.api.routers.documents import router as documents_router
from legalai.api.routers.editor import router as editor_router
from legalai.api.routers.health import router as health_router
from legalai.api.routers.redline import router as redline_router

__all__ = [
    "documents_router",
    "editor_router",
    "health_router",
    "redline_router",
]
