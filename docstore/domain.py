"""Domain records for folders, files and audit events."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import FrozenSet, List, Optional

from common.types import Actor, AuditTarget


class AuditAction(str, Enum):
    CREATE_FOLDER = "create_folder"
    UPLOAD = "upload"
    DOWNLOAD = "download"
    DELETE = "delete"


class TargetType(str, Enum):
    FILE = "file"
    FOLDER = "folder"


class Permission(Enum):
    """
    Decision input for file mutations, computed once per call.
    """
    OWNER = "owner"
    ADMIN = "admin"
    OTHER = "other"


@dataclass(frozen=True)
class Folder:
    folder_id: str
    name: str
    parent_id: Optional[str]
    created_at: datetime
    created_by: Actor
    updated_at: datetime
    updated_by: Actor


@dataclass(frozen=True)
class FileRecord:
    """
    Metadata for a stored file. file_id is also the id of its blob.
    """
    file_id: str
    name: str
    folder_id: Optional[str]
    mime_type: str
    size: int
    uploaded_at: datetime
    uploaded_by: Actor
    last_access_at: Optional[datetime] = None
    last_access_by: Optional[Actor] = None
    version: int = 1
    tags: FrozenSet[str] = field(default_factory=frozenset)
    notes: str = ""

    @property
    def owner_email(self) -> str:
        return self.uploaded_by.email


@dataclass(frozen=True)
class AuditEvent:
    ts: datetime
    actor: Actor
    action: AuditAction
    target: AuditTarget
    from_folder_id: Optional[str] = None
    to_folder_id: Optional[str] = None
    event_id: Optional[int] = None


@dataclass(frozen=True)
class Breadcrumb:
    folder_id: str
    name: str


@dataclass(frozen=True)
class FolderContents:
    folders: List[Folder]
    files: List[FileRecord]


@dataclass(frozen=True)
class FileProperties:
    file: FileRecord
    events: List[AuditEvent]


def resolve_permission(actor: Actor, record: FileRecord) -> Permission:
    """
    Decide what the actor may do with a file record.

    Ownership is checked first, so an admin who uploaded a file is its owner.
    """
    if actor.email == record.owner_email:
        return Permission.OWNER
    if actor.is_admin:
        return Permission.ADMIN
    return Permission.OTHER
