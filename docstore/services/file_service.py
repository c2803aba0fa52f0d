"""File service: upload, download, properties and delete."""

from dataclasses import replace
from typing import AsyncGenerator, AsyncIterable, Optional, Tuple

from common.constants import DEFAULT_MIME_TYPE
from common.logging_config import get_logger
from common.types import Actor, AuditTarget
from docstore.context import StorageContext
from docstore.domain import (
    AuditAction,
    FileProperties,
    FileRecord,
    Permission,
    TargetType,
    resolve_permission,
)
from docstore.exceptions import (
    FileRecordNotFoundError,
    FolderNotFoundError,
    ForbiddenError,
    InternalInconsistencyError,
    InvalidInputError,
)
from docstore.repositories.file_repository import FileRepository
from docstore.repositories.folder_repository import FolderRepository
from docstore.services.audit_trail import AuditTrail
from docstore.utils import normalize_folder_id, utc_now

logger = get_logger(__name__)


def _file_target(record: FileRecord) -> AuditTarget:
    return AuditTarget(type=TargetType.FILE.value, id=record.file_id, name=record.name)


class FileService:
    def __init__(self, context: StorageContext):
        self.folder_repo = FolderRepository(context.database)
        self.file_repo = FileRepository(context.database)
        self.blob_store = context.blob_store
        self.audit = AuditTrail(context)
        self.max_upload_bytes = context.max_upload_bytes

    async def upload_file(
        self,
        stream: Optional[AsyncIterable[bytes]],
        filename: Optional[str],
        mime_type: Optional[str],
        folder_id: Optional[str],
        actor: Actor,
    ) -> FileRecord:
        """
        Store an uploaded file: blob first, metadata second, audit last.

        If the process dies between the blob commit and the metadata insert,
        the blob is left orphaned and unreferenced. Nothing reclaims it
        automatically.

        Args:
            stream: Async iterable of byte pieces. None means no file was sent
            filename: Original file name
            mime_type: Content type; defaults to application/octet-stream
            folder_id: Target folder id, or None/"root" for the root
            actor: Uploading identity, who becomes the owner

        Returns:
            The stored FileRecord

        Raises:
            InvalidInputError: If no stream or no filename is supplied
            UploadTooLargeError: If the stream exceeds the upload limit
            FolderNotFoundError: If folder_id does not resolve
        """
        if stream is None:
            logger.warning(f"Upload failed: no file data [actor={actor.email}]")
            raise InvalidInputError("File data is required")

        filename = (filename or "").strip()
        if not filename:
            logger.warning(f"Upload failed: empty filename [actor={actor.email}]")
            raise InvalidInputError("File name is required")

        folder_id = normalize_folder_id(folder_id)
        if folder_id is not None and self.folder_repo.get_by_id(folder_id) is None:
            logger.warning(f"Upload failed: unknown folder [folder_id={folder_id}]")
            raise FolderNotFoundError(f"Folder {folder_id} not found")

        try:
            async with self.blob_store.open_write(max_size=self.max_upload_bytes) as writer:
                async for piece in stream:
                    await writer.write(piece)
        except Exception as e:
            logger.warning(f"Upload of '{filename}' aborted before metadata was written: {e}")
            raise

        file_id = writer.blob_id
        record = FileRecord(
            file_id=file_id,
            name=filename,
            folder_id=folder_id,
            mime_type=mime_type or DEFAULT_MIME_TYPE,
            size=writer.bytes_written,
            uploaded_at=utc_now(),
            uploaded_by=actor,
        )

        try:
            self.file_repo.create_file(record)
        except Exception:
            self._discard_orphaned_blob(file_id)
            raise

        logger.info(f"Uploaded '{filename}' [file_id={file_id}] [size={record.size}] [folder_id={folder_id}]")

        self.audit.record_action(
            actor,
            AuditAction.UPLOAD,
            _file_target(record),
            from_folder_id=None,
            to_folder_id=folder_id,
        )
        return record

    def _discard_orphaned_blob(self, file_id: str) -> None:
        try:
            if self.blob_store.delete(file_id):
                logger.info(f"Removed blob left without metadata [file_id={file_id}]")
        except OSError as e:
            logger.error(f"Orphaned blob could not be removed [file_id={file_id}]: {e}")

    async def download_file(self, file_id: str, actor: Actor) -> Tuple[FileRecord, AsyncGenerator[bytes, None]]:
        """
        Grant access to a file and return its byte stream.

        Access time and the audit event are written before the stream is
        opened, so they stand even if the caller abandons the download.

        Raises:
            FileRecordNotFoundError: If file_id is unknown
            InternalInconsistencyError: If the record has no blob
            BlobNotFoundError: If the blob disappears after access was granted
        """
        record = self._get_record(file_id)
        self._ensure_blob_present(record)

        accessed_at = utc_now()
        self.file_repo.update_last_access(file_id, accessed_at, actor)
        self.audit.record_action(
            actor,
            AuditAction.DOWNLOAD,
            _file_target(record),
            from_folder_id=record.folder_id,
            to_folder_id=record.folder_id,
        )

        pieces = self.blob_store.open_read(file_id)
        record = replace(record, last_access_at=accessed_at, last_access_by=actor)
        return record, self._stream_file_data(record, pieces)

    async def _stream_file_data(
        self, record: FileRecord, pieces: AsyncGenerator[bytes, None]
    ) -> AsyncGenerator[bytes, None]:
        bytes_streamed = 0
        completed = False
        try:
            async for piece in pieces:
                bytes_streamed += len(piece)
                yield piece
            completed = True
        finally:
            await pieces.aclose()
            if completed:
                logger.info(f"Streamed file {record.file_id}: {bytes_streamed} bytes")
            else:
                logger.info(
                    f"Download of {record.file_id} stopped after {bytes_streamed}/{record.size} bytes"
                )

    async def get_properties(self, file_id: str) -> FileProperties:
        """
        File record plus its most recent audit events, newest first.
        """
        record = self._get_record(file_id)
        self._ensure_blob_present(record)
        events = self.audit.recent_for_target(file_id)
        return FileProperties(file=record, events=events)

    async def delete_file(self, file_id: str, actor: Actor) -> bool:
        """
        Delete a file's blob and record. Only the owner or an admin may.

        Raises:
            FileRecordNotFoundError: If file_id is unknown
            ForbiddenError: If the actor is neither owner nor admin
        """
        record = self._get_record(file_id)

        permission = resolve_permission(actor, record)
        if permission is Permission.OTHER:
            logger.warning(f"Delete denied [file_id={file_id}] [actor={actor.email}] [owner={record.owner_email}]")
            raise ForbiddenError(f"{actor.email} may not delete file {file_id}")

        if not self.blob_store.delete(file_id):
            logger.error(f"Inconsistency: file record {file_id} had no blob at delete time")

        if not self.file_repo.delete_file(file_id):
            logger.warning(f"File record {file_id} was already gone when deleting")

        logger.info(f"Deleted file {file_id} as {permission.value} [actor={actor.email}]")

        self.audit.record_action(
            actor,
            AuditAction.DELETE,
            _file_target(record),
            from_folder_id=record.folder_id,
            to_folder_id=None,
        )
        return True

    def _get_record(self, file_id: str) -> FileRecord:
        record = self.file_repo.get_by_id(file_id)
        if record is None:
            raise FileRecordNotFoundError(f"File {file_id} not found")
        return record

    def _ensure_blob_present(self, record: FileRecord) -> None:
        if not self.blob_store.exists(record.file_id):
            logger.error(f"Inconsistency: file record {record.file_id} ('{record.name}') has no blob")
            raise InternalInconsistencyError(f"Stored data for file {record.file_id} is missing")
