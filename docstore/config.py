"""Configuration settings for the document store service."""

import os

from common.constants import (
    DEFAULT_BLOB_STORAGE_PATH,
    DEFAULT_DATABASE_PATH,
    MAX_UPLOAD_SIZE_BYTES,
    RECENT_EVENTS_LIMIT,
)


DATABASE_PATH = os.environ.get("DOCSTORE_DATABASE_PATH", DEFAULT_DATABASE_PATH)

BLOB_STORAGE_PATH = os.environ.get("DOCSTORE_BLOB_PATH", DEFAULT_BLOB_STORAGE_PATH)

DOCSTORE_HOST = os.environ.get("DOCSTORE_HOST", "0.0.0.0")

DOCSTORE_PORT = int(os.environ.get("DOCSTORE_PORT", "8000"))

MAX_UPLOAD_BYTES = int(os.environ.get("DOCSTORE_MAX_UPLOAD_BYTES", str(MAX_UPLOAD_SIZE_BYTES)))

RECENT_EVENTS = int(os.environ.get("DOCSTORE_RECENT_EVENTS", str(RECENT_EVENTS_LIMIT)))

ADMIN_ROLE = "admin"
