"""Service layer for business logic."""

from docstore.services.audit_trail import AuditTrail
from docstore.services.file_service import FileService
from docstore.services.folder_service import FolderService

__all__ = [
    "AuditTrail",
    "FileService",
    "FolderService",
]
