"""Folder API routes."""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from common.types import Actor
from docstore.auth import get_current_actor
from docstore.context import StorageContext, get_storage_context
from docstore.schemas.files import file_record_response
from docstore.schemas.folders import (
    BreadcrumbResponse,
    BreadcrumbsResponse,
    ChildrenResponse,
    CreateFolderRequest,
    FolderResponse,
    folder_response,
)
from docstore.services.folder_service import FolderService

router = APIRouter(tags=["Folders"])


@router.post("/folders", response_model=FolderResponse, status_code=status.HTTP_201_CREATED)
async def create_folder(
    request: CreateFolderRequest,
    actor: Actor = Depends(get_current_actor),
    context: StorageContext = Depends(get_storage_context)
):
    """
    Create a folder.

    Parameters:
        - name: Folder name (trimmed, must not be empty)
        - parent_id: Parent folder id, or null/"root" for the root

    Raises:
        - 400: Empty name
        - 401: No actor forwarded
        - 404: Parent folder not found
    """
    folder_service = FolderService(context)
    folder = await folder_service.create_folder(request.name, request.parent_id, actor)
    return folder_response(folder)


@router.get("/folders/{folder_id}/children", response_model=ChildrenResponse)
async def list_children(
    folder_id: str,
    context: StorageContext = Depends(get_storage_context)
):
    """
    List sub-folders and files of a folder ("root" for the root), sorted by name.

    Unknown folder ids return empty lists.
    """
    folder_service = FolderService(context)
    contents = await folder_service.list_children(folder_id)
    return ChildrenResponse(
        folders=[folder_response(folder) for folder in contents.folders],
        files=[file_record_response(record) for record in contents.files],
    )


@router.get("/breadcrumbs", response_model=BreadcrumbsResponse)
async def breadcrumbs(
    folder_id: Optional[str] = Query(None, description='Folder id or "root"'),
    context: StorageContext = Depends(get_storage_context)
):
    """
    Path from the root to a folder, root first.

    Raises:
        - 500: Folder tree is inconsistent (cycle or broken parent chain)
    """
    folder_service = FolderService(context)
    crumbs = await folder_service.breadcrumbs(folder_id)
    return BreadcrumbsResponse(
        breadcrumbs=[BreadcrumbResponse(folder_id=c.folder_id, name=c.name) for c in crumbs]
    )
