"""Editor routes module."""

from .elements import router as elements_router
from .export import router as export_router
from .preview import router as preview_router
from .sessions import router as sessions_router

__all__ = [
    "elements_router",
    "export_router",
    "preview_router",
    "sessions_router",
]
