# Routers package
from . import catalog_router
from . import motorcycles_router
from . import uploads_router

__all__ = [
    "catalog_router",
    "motorcycles_router",
    "uploads_router",
]
