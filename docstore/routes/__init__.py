"""API routes package."""

from docstore.routes.audit_routes import router as audit_router
from docstore.routes.file_routes import router as file_router
from docstore.routes.folder_routes import router as folder_router

__all__ = ["audit_router", "file_router", "folder_router"]
