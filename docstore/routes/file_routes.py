"""File operation API routes."""

from typing import AsyncIterator, Optional
from urllib.parse import quote

from fastapi import APIRouter, Depends, File, Query, UploadFile, status
from fastapi.responses import StreamingResponse

from common.constants import STREAM_PIECE_SIZE_BYTES
from common.types import Actor
from docstore.auth import get_current_actor
from docstore.context import StorageContext, get_storage_context
from docstore.schemas.files import (
    DeleteFileResponse,
    FilePropertiesResponse,
    FileRecordResponse,
    audit_event_response,
    file_record_response,
)
from docstore.services.file_service import FileService

router = APIRouter(prefix="/files", tags=["Files"])


async def _read_upload(upload: UploadFile) -> AsyncIterator[bytes]:
    while True:
        piece = await upload.read(STREAM_PIECE_SIZE_BYTES)
        if not piece:
            break
        yield piece


@router.post("/upload", response_model=FileRecordResponse, status_code=status.HTTP_201_CREATED)
async def upload_file(
    file: Optional[UploadFile] = File(None),
    folder_id: Optional[str] = Query(None, description='Target folder id or "root"'),
    actor: Actor = Depends(get_current_actor),
    context: StorageContext = Depends(get_storage_context)
):
    """
    Upload a file into a folder.

    Parameters:
        - file: File to upload (multipart/form-data)
        - folder_id: Target folder id, omitted or "root" for the root

    Returns:
        - The stored file record

    Raises:
        - 400: No file part in the request
        - 401: No actor forwarded
        - 404: Folder not found
        - 413: File larger than the upload limit
    """
    file_service = FileService(context)

    stream = _read_upload(file) if file is not None else None
    record = await file_service.upload_file(
        stream=stream,
        filename=file.filename if file is not None else None,
        mime_type=file.content_type if file is not None else None,
        folder_id=folder_id,
        actor=actor,
    )
    return file_record_response(record)


@router.get("/{file_id}/download")
async def download_file(
    file_id: str,
    actor: Actor = Depends(get_current_actor),
    context: StorageContext = Depends(get_storage_context)
):
    """
    Download a file by file_id.

    The access is audited before the first byte is sent.

    Raises:
        - 401: No actor forwarded
        - 404: File not found
        - 500: File record without stored data
    """
    file_service = FileService(context)

    record, stream = await file_service.download_file(file_id, actor)

    return StreamingResponse(
        stream,
        headers={
            "Content-Type": record.mime_type,
            "Content-Disposition": f'attachment; filename="{quote(record.name)}"',
            "Content-Length": str(record.size),
        }
    )


@router.get("/{file_id}/properties", response_model=FilePropertiesResponse)
async def file_properties(
    file_id: str,
    context: StorageContext = Depends(get_storage_context)
):
    """
    File metadata plus its most recent audit events, newest first.

    Raises:
        - 404: File not found
    """
    file_service = FileService(context)
    properties = await file_service.get_properties(file_id)
    return FilePropertiesResponse(
        file=file_record_response(properties.file),
        events=[audit_event_response(event) for event in properties.events],
    )


@router.delete("/{file_id}", response_model=DeleteFileResponse)
async def delete_file(
    file_id: str,
    actor: Actor = Depends(get_current_actor),
    context: StorageContext = Depends(get_storage_context)
):
    """
    Delete a file. Allowed for the uploader or an admin.

    Raises:
        - 401: No actor forwarded
        - 403: Actor is neither owner nor admin
        - 404: File not found
    """
    file_service = FileService(context)
    ok = await file_service.delete_file(file_id, actor)
    return DeleteFileResponse(ok=ok, file_id=file_id)
