"""Pydantic schemas for API requests and responses."""

from docstore.schemas.common import ActorResponse, ErrorResponse
from docstore.schemas.files import (
    AuditEventListResponse,
    AuditEventResponse,
    AuditTargetResponse,
    DeleteFileResponse,
    FilePropertiesResponse,
    FileRecordResponse,
)
from docstore.schemas.folders import (
    BreadcrumbResponse,
    BreadcrumbsResponse,
    ChildrenResponse,
    CreateFolderRequest,
    FolderResponse,
)

__all__ = [
    "ActorResponse",
    "ErrorResponse",
    "AuditEventListResponse",
    "AuditEventResponse",
    "AuditTargetResponse",
    "DeleteFileResponse",
    "FilePropertiesResponse",
    "FileRecordResponse",
    "BreadcrumbResponse",
    "BreadcrumbsResponse",
    "ChildrenResponse",
    "CreateFolderRequest",
    "FolderResponse",
]
