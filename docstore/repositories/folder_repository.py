"""Folder repository for database operations."""

from datetime import datetime
from typing import List, Optional

from common.logging_config import get_logger
from common.types import Actor
from docstore.database import Database
from docstore.domain import Folder

logger = get_logger(__name__)

FOLDER_COLUMNS = """
    folder_id, name, parent_id, created_at, created_by_id, created_by_email,
    updated_at, updated_by_id, updated_by_email
"""


class FolderRepository:
    def __init__(self, db: Database):
        self.db = db

    def create_folder(self, folder: Folder) -> Folder:
        logger.debug(f"Creating folder [folder_id={folder.folder_id}] [parent_id={folder.parent_id}]")
        with self.db.connection() as conn:
            try:
                conn.execute(
                    f"""
                    INSERT INTO folders ({FOLDER_COLUMNS})
                    VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                    """,
                    (
                        folder.folder_id,
                        folder.name,
                        folder.parent_id,
                        folder.created_at.isoformat(),
                        folder.created_by.id,
                        folder.created_by.email,
                        folder.updated_at.isoformat(),
                        folder.updated_by.id,
                        folder.updated_by.email,
                    )
                )
                conn.commit()
            except Exception as e:
                conn.rollback()
                logger.error(f"Failed to create folder [folder_id={folder.folder_id}]: {e}", exc_info=True)
                raise
        return folder

    def get_by_id(self, folder_id: str) -> Optional[Folder]:
        with self.db.connection() as conn:
            row = conn.execute(
                f"SELECT {FOLDER_COLUMNS} FROM folders WHERE folder_id = ?",
                (folder_id,)
            ).fetchone()

            if row is None:
                return None

            return self._row_to_folder(row)

    def list_children(self, parent_id: Optional[str]) -> List[Folder]:
        """
        List folders directly under parent_id (None for the root), by name.
        """
        with self.db.connection() as conn:
            rows = conn.execute(
                f"""
                SELECT {FOLDER_COLUMNS} FROM folders
                WHERE parent_id IS ?
                ORDER BY name, created_at, folder_id
                """,
                (parent_id,)
            ).fetchall()

            return [self._row_to_folder(row) for row in rows]

    @staticmethod
    def _row_to_folder(row) -> Folder:
        return Folder(
            folder_id=row["folder_id"],
            name=row["name"],
            parent_id=row["parent_id"],
            created_at=datetime.fromisoformat(row["created_at"]),
            created_by=Actor(id=row["created_by_id"], email=row["created_by_email"]),
            updated_at=datetime.fromisoformat(row["updated_at"]),
            updated_by=Actor(id=row["updated_by_id"], email=row["updated_by_email"]),
        )
