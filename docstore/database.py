"""Database schema and connection management for SQLite."""

import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Generator

from common.logging_config import get_logger

logger = get_logger(__name__)


class Database:
    """
    Handle on the metadata database shared by the folder, file and event
    repositories.

    Every call to connection() opens a short-lived connection, so concurrent
    requests never share a cursor.
    """

    def __init__(self, path: str):
        self.path = str(path)

    @contextmanager
    def connection(self) -> Generator[sqlite3.Connection, None, None]:
        """
        Context manager for database connections.
        """
        conn = sqlite3.connect(self.path)
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA foreign_keys = ON")
        try:
            yield conn
        finally:
            conn.close()

    def init_schema(self) -> None:
        """
        Create tables and indexes if they don't exist.
        """
        Path(self.path).parent.mkdir(parents=True, exist_ok=True)

        with self.connection() as conn:
            cursor = conn.cursor()

            cursor.execute("PRAGMA journal_mode = WAL")

            cursor.execute("""
                CREATE TABLE IF NOT EXISTS folders (
                    folder_id TEXT PRIMARY KEY,
                    name TEXT NOT NULL,
                    parent_id TEXT,
                    created_at TEXT NOT NULL,
                    created_by_id TEXT,
                    created_by_email TEXT NOT NULL,
                    updated_at TEXT NOT NULL,
                    updated_by_id TEXT,
                    updated_by_email TEXT NOT NULL
                )
            """)

            cursor.execute("""
                CREATE TABLE IF NOT EXISTS files (
                    file_id TEXT PRIMARY KEY,
                    name TEXT NOT NULL,
                    folder_id TEXT,
                    mime_type TEXT NOT NULL,
                    size INTEGER NOT NULL,
                    uploaded_at TEXT NOT NULL,
                    uploaded_by_id TEXT,
                    uploaded_by_email TEXT NOT NULL,
                    last_access_at TEXT,
                    last_access_by_id TEXT,
                    last_access_by_email TEXT,
                    version INTEGER NOT NULL DEFAULT 1,
                    notes TEXT NOT NULL DEFAULT ''
                )
            """)

            cursor.execute("""
                CREATE TABLE IF NOT EXISTS file_tags (
                    file_id TEXT NOT NULL,
                    tag TEXT NOT NULL,
                    PRIMARY KEY(file_id, tag),
                    FOREIGN KEY(file_id) REFERENCES files(file_id) ON DELETE CASCADE
                )
            """)

            cursor.execute("""
                CREATE TABLE IF NOT EXISTS file_events (
                    event_id INTEGER PRIMARY KEY AUTOINCREMENT,
                    ts TEXT NOT NULL,
                    actor_id TEXT,
                    actor_email TEXT NOT NULL,
                    actor_is_admin INTEGER NOT NULL DEFAULT 0,
                    action TEXT NOT NULL,
                    target_type TEXT NOT NULL,
                    target_id TEXT NOT NULL,
                    target_name TEXT NOT NULL,
                    from_folder_id TEXT,
                    to_folder_id TEXT
                )
            """)

            cursor.execute("""
                CREATE INDEX IF NOT EXISTS idx_folders_parent_name ON folders(parent_id, name)
            """)

            cursor.execute("""
                CREATE INDEX IF NOT EXISTS idx_files_folder_name ON files(folder_id, name)
            """)

            cursor.execute("""
                CREATE INDEX IF NOT EXISTS idx_events_target ON file_events(target_id, ts)
            """)

            cursor.execute("""
                CREATE INDEX IF NOT EXISTS idx_events_actor ON file_events(actor_email, ts)
            """)

            conn.commit()

        logger.info(f"Database schema ready [path={self.path}]")
