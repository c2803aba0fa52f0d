"""Pydantic schemas for file endpoints."""

from typing import List, Optional

from pydantic import BaseModel

from docstore.domain import AuditEvent, FileRecord
from docstore.schemas.common import ActorResponse, actor_response


class FileRecordResponse(BaseModel):
    """Response model for file metadata."""
    file_id: str
    name: str
    folder_id: Optional[str] = None
    mime_type: str
    size: int
    uploaded_at: str
    uploaded_by: ActorResponse
    last_access_at: Optional[str] = None
    last_access_by: Optional[ActorResponse] = None
    version: int
    tags: List[str]
    notes: str


class AuditTargetResponse(BaseModel):
    """File or folder an event refers to."""
    type: str
    id: str
    name: str


class AuditEventResponse(BaseModel):
    """Response model for one audit trail entry."""
    ts: str
    actor: ActorResponse
    action: str
    target: AuditTargetResponse
    from_folder_id: Optional[str] = None
    to_folder_id: Optional[str] = None


class FilePropertiesResponse(BaseModel):
    """Response model for file properties."""
    file: FileRecordResponse
    events: List[AuditEventResponse]


class DeleteFileResponse(BaseModel):
    """Response model for file deletion."""
    ok: bool
    file_id: str


class AuditEventListResponse(BaseModel):
    """Response model for an actor's audit history."""
    events: List[AuditEventResponse]


def file_record_response(record: FileRecord) -> FileRecordResponse:
    return FileRecordResponse(
        file_id=record.file_id,
        name=record.name,
        folder_id=record.folder_id,
        mime_type=record.mime_type,
        size=record.size,
        uploaded_at=record.uploaded_at.isoformat(),
        uploaded_by=actor_response(record.uploaded_by),
        last_access_at=record.last_access_at.isoformat() if record.last_access_at else None,
        last_access_by=actor_response(record.last_access_by) if record.last_access_by else None,
        version=record.version,
        tags=sorted(record.tags),
        notes=record.notes,
    )


def audit_event_response(event: AuditEvent) -> AuditEventResponse:
    return AuditEventResponse(
        ts=event.ts.isoformat(),
        actor=actor_response(event.actor),
        action=event.action.value,
        target=AuditTargetResponse(type=event.target.type, id=event.target.id, name=event.target.name),
        from_folder_id=event.from_folder_id,
        to_folder_id=event.to_folder_id,
    )
