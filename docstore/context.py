"""Storage context handed to services at construction."""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from fastapi import Request

from common.logging_config import get_logger
from docstore import config
from docstore.blob_storage import BlobStore
from docstore.database import Database

logger = get_logger(__name__)


@dataclass
class StorageContext:
    """
    The shared stores behind every folder and file operation.

    Built once by the process bootstrap (or a test fixture) and passed
    explicitly to services; nothing in the package holds it globally.
    """
    database: Database
    blob_store: BlobStore
    max_upload_bytes: int = config.MAX_UPLOAD_BYTES
    recent_events_limit: int = config.RECENT_EVENTS


def create_storage_context(
    database_path: Optional[str] = None,
    blob_path: Optional[str] = None,
    max_upload_bytes: Optional[int] = None,
    recent_events_limit: Optional[int] = None,
) -> StorageContext:
    """
    Build a storage context and prepare its schema and blob directory.

    Args:
        database_path: SQLite file path. Defaults to DOCSTORE_DATABASE_PATH
        blob_path: Blob directory. Defaults to DOCSTORE_BLOB_PATH
        max_upload_bytes: Upload size limit. Defaults to DOCSTORE_MAX_UPLOAD_BYTES
        recent_events_limit: Events returned with file properties. Defaults to DOCSTORE_RECENT_EVENTS

    Returns:
        Ready-to-use StorageContext
    """
    database = Database(database_path or config.DATABASE_PATH)
    database.init_schema()

    blob_store = BlobStore(Path(blob_path or config.BLOB_STORAGE_PATH))
    blob_store.ensure_directory()

    context = StorageContext(
        database=database,
        blob_store=blob_store,
        max_upload_bytes=max_upload_bytes if max_upload_bytes is not None else config.MAX_UPLOAD_BYTES,
        recent_events_limit=recent_events_limit if recent_events_limit is not None else config.RECENT_EVENTS,
    )
    logger.info(f"Storage context ready [database={database.path}] [blobs={blob_store.root}]")
    return context


def get_storage_context(request: Request) -> StorageContext:
    """
    FastAPI dependency returning the context installed on the application.
    """
    return request.app.state.storage
