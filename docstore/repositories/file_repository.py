"""File metadata repository for database operations."""

import sqlite3
from datetime import datetime
from typing import List, Optional

from common.logging_config import get_logger
from common.types import Actor
from docstore.database import Database
from docstore.domain import FileRecord

logger = get_logger(__name__)

FILE_COLUMNS = """
    file_id, name, folder_id, mime_type, size, uploaded_at, uploaded_by_id,
    uploaded_by_email, last_access_at, last_access_by_id, last_access_by_email,
    version, notes
"""


class FileRepository:
    def __init__(self, db: Database):
        self.db = db

    def create_file(self, record: FileRecord) -> FileRecord:
        logger.debug(f"Creating file record [file_id={record.file_id}] [folder_id={record.folder_id}]")
        with self.db.connection() as conn:
            try:
                conn.execute(
                    f"""
                    INSERT INTO files ({FILE_COLUMNS})
                    VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                    """,
                    (
                        record.file_id,
                        record.name,
                        record.folder_id,
                        record.mime_type,
                        record.size,
                        record.uploaded_at.isoformat(),
                        record.uploaded_by.id,
                        record.uploaded_by.email,
                        record.last_access_at.isoformat() if record.last_access_at else None,
                        record.last_access_by.id if record.last_access_by else None,
                        record.last_access_by.email if record.last_access_by else None,
                        record.version,
                        record.notes,
                    )
                )
                for tag in sorted(record.tags):
                    conn.execute(
                        "INSERT OR IGNORE INTO file_tags (file_id, tag) VALUES (?, ?)",
                        (record.file_id, tag)
                    )
                conn.commit()
            except Exception as e:
                conn.rollback()
                logger.error(f"Failed to create file record [file_id={record.file_id}]: {e}", exc_info=True)
                raise
        return record

    def get_by_id(self, file_id: str) -> Optional[FileRecord]:
        with self.db.connection() as conn:
            row = conn.execute(
                f"SELECT {FILE_COLUMNS} FROM files WHERE file_id = ?",
                (file_id,)
            ).fetchone()

            if row is None:
                return None

            return self._row_to_file(row, self._get_tags(conn, file_id))

    def list_by_folder(self, folder_id: Optional[str]) -> List[FileRecord]:
        """
        List files directly in folder_id (None for the root), by name.
        """
        with self.db.connection() as conn:
            rows = conn.execute(
                f"""
                SELECT {FILE_COLUMNS} FROM files
                WHERE folder_id IS ?
                ORDER BY name, uploaded_at, file_id
                """,
                (folder_id,)
            ).fetchall()

            return [self._row_to_file(row, self._get_tags(conn, row["file_id"])) for row in rows]

    def update_last_access(self, file_id: str, accessed_at: datetime, actor: Actor) -> bool:
        """
        Record who last accessed a file and when.

        Returns:
            True if a row was updated, False if the file no longer exists
        """
        with self.db.connection() as conn:
            cursor = conn.execute(
                """
                UPDATE files
                SET last_access_at = ?, last_access_by_id = ?, last_access_by_email = ?
                WHERE file_id = ?
                """,
                (accessed_at.isoformat(), actor.id, actor.email, file_id)
            )
            conn.commit()
            return cursor.rowcount > 0

    def delete_file(self, file_id: str) -> bool:
        """
        Delete a file record and its tags.

        Returns:
            True if a row was deleted, False if none existed
        """
        logger.debug(f"Deleting file record [file_id={file_id}]")
        with self.db.connection() as conn:
            cursor = conn.execute("DELETE FROM files WHERE file_id = ?", (file_id,))
            conn.commit()
            return cursor.rowcount > 0

    @staticmethod
    def _get_tags(conn: sqlite3.Connection, file_id: str) -> frozenset:
        rows = conn.execute(
            "SELECT tag FROM file_tags WHERE file_id = ? ORDER BY tag",
            (file_id,)
        ).fetchall()
        return frozenset(row["tag"] for row in rows)

    @staticmethod
    def _row_to_file(row, tags: frozenset) -> FileRecord:
        last_access_by = None
        if row["last_access_by_email"] is not None:
            last_access_by = Actor(id=row["last_access_by_id"], email=row["last_access_by_email"])

        return FileRecord(
            file_id=row["file_id"],
            name=row["name"],
            folder_id=row["folder_id"],
            mime_type=row["mime_type"],
            size=row["size"],
            uploaded_at=datetime.fromisoformat(row["uploaded_at"]),
            uploaded_by=Actor(id=row["uploaded_by_id"], email=row["uploaded_by_email"]),
            last_access_at=datetime.fromisoformat(row["last_access_at"]) if row["last_access_at"] else None,
            last_access_by=last_access_by,
            version=row["version"],
            tags=tags,
            notes=row["notes"],
        )
