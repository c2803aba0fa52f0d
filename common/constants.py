"""Project-wide constants (root folder sentinel, stream sizes, limits)."""

ROOT_FOLDER_ID: str = "root"
ROOT_FOLDER_NAME: str = "Root"

STREAM_PIECE_SIZE_BYTES: int = 64 * 1024  # 64 KiB per read/write piece
MAX_UPLOAD_SIZE_BYTES: int = 512 * 1024 * 1024  # 512 MiB per uploaded file
RECENT_EVENTS_LIMIT: int = 10

DEFAULT_MIME_TYPE: str = "application/octet-stream"
DEFAULT_DATABASE_PATH: str = "/app/data/docstore.db"
DEFAULT_BLOB_STORAGE_PATH: str = "/app/data/blobs"
