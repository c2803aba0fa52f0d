"""Pydantic schemas for folder endpoints."""

from typing import List, Optional

from pydantic import BaseModel

from docstore.domain import Folder
from docstore.schemas.common import ActorResponse, actor_response
from docstore.schemas.files import FileRecordResponse


class CreateFolderRequest(BaseModel):
    """Request model for folder creation. parent_id None or "root" means the root."""
    name: Optional[str] = None
    parent_id: Optional[str] = None


class FolderResponse(BaseModel):
    """Response model for a folder."""
    folder_id: str
    name: str
    parent_id: Optional[str] = None
    created_at: str
    created_by: ActorResponse
    updated_at: str
    updated_by: ActorResponse


class ChildrenResponse(BaseModel):
    """Response model for the contents of a folder."""
    folders: List[FolderResponse]
    files: List[FileRecordResponse]


class BreadcrumbResponse(BaseModel):
    """One step of a breadcrumb path."""
    folder_id: str
    name: str


class BreadcrumbsResponse(BaseModel):
    """Response model for a breadcrumb path, root first."""
    breadcrumbs: List[BreadcrumbResponse]


def folder_response(folder: Folder) -> FolderResponse:
    return FolderResponse(
        folder_id=folder.folder_id,
        name=folder.name,
        parent_id=folder.parent_id,
        created_at=folder.created_at.isoformat(),
        created_by=actor_response(folder.created_by),
        updated_at=folder.updated_at.isoformat(),
        updated_by=actor_response(folder.updated_by),
    )
