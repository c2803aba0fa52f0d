"""Manages blob files on disk: streamed write, streamed read and delete."""

import os
import uuid
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncGenerator, AsyncIterator, Optional

import aiofiles

from common.constants import STREAM_PIECE_SIZE_BYTES
from common.logging_config import get_logger
from docstore.exceptions import BlobNotFoundError, UploadTooLargeError

logger = get_logger(__name__)

BLOB_SUFFIX = ".blob"
PART_SUFFIX = ".part"


class BlobWriter:
    """
    Write handle for a blob that is still being received.

    The blob id is assigned up front; the bytes only become visible to
    readers once the surrounding ``BlobStore.open_write`` block exits cleanly.
    """

    def __init__(self, blob_id: str, handle, max_size: Optional[int] = None):
        self.blob_id = blob_id
        self.bytes_written = 0
        self._handle = handle
        self._max_size = max_size

    async def write(self, data: bytes) -> None:
        """
        Append a piece of data to the blob.

        Raises:
            UploadTooLargeError: If the piece would push the blob past max_size
        """
        if self._max_size is not None and self.bytes_written + len(data) > self._max_size:
            raise UploadTooLargeError(
                f"Blob {self.blob_id} exceeds maximum size of {self._max_size} bytes"
            )
        await self._handle.write(data)
        self.bytes_written += len(data)


class BlobStore:
    """
    Content-opaque byte storage addressed by generated ids.

    Each blob lives in ``<root>/<blob_id>.blob``. Writes go to a ``.part``
    file that is renamed into place on completion, so a blob is either fully
    present or absent for readers.
    """

    def __init__(self, root: Path, piece_size: int = STREAM_PIECE_SIZE_BYTES):
        self.root = Path(root)
        self.piece_size = piece_size

    def ensure_directory(self) -> None:
        """Ensure the blob directory exists."""
        self.root.mkdir(parents=True, exist_ok=True)

    def get_blob_path(self, blob_id: str) -> Path:
        """
        Get file path for a committed blob.

        Args:
            blob_id: Id of the blob

        Returns:
            Path object for the blob file
        """
        return self.root / f"{blob_id}{BLOB_SUFFIX}"

    def _get_part_path(self, blob_id: str) -> Path:
        return self.root / f"{blob_id}{PART_SUFFIX}"

    @asynccontextmanager
    async def open_write(self, max_size: Optional[int] = None) -> AsyncIterator[BlobWriter]:
        """
        Open a write stream for a new blob.

        Usage:
            async with blob_store.open_write() as writer:
                await writer.write(piece)
            # writer.blob_id is now readable

        Args:
            max_size: Optional upper bound on the number of bytes accepted

        Yields:
            BlobWriter whose blob_id is assigned before any byte is written

        Raises:
            UploadTooLargeError: If more than max_size bytes are written
            OSError: If the write or the final rename fails
        """
        self.ensure_directory()
        blob_id = uuid.uuid4().hex
        part_path = self._get_part_path(blob_id)

        try:
            async with aiofiles.open(part_path, "wb") as handle:
                writer = BlobWriter(blob_id, handle, max_size=max_size)
                yield writer
                await handle.flush()
            os.replace(part_path, self.get_blob_path(blob_id))
        except BaseException:
            part_path.unlink(missing_ok=True)
            logger.warning(f"Discarded partial blob [blob_id={blob_id}]")
            raise

        logger.info(f"Blob committed [blob_id={blob_id}] [size={writer.bytes_written}]")

    def open_read(self, blob_id: str) -> AsyncGenerator[bytes, None]:
        """
        Open a read stream over a committed blob.

        Args:
            blob_id: Id of the blob

        Returns:
            Async iterator yielding blob data pieces

        Raises:
            BlobNotFoundError: If no blob exists for blob_id
        """
        path = self.get_blob_path(blob_id)
        if not path.exists():
            raise BlobNotFoundError(f"Blob {blob_id} not found")
        return self._stream(blob_id, path)

    async def _stream(self, blob_id: str, path: Path) -> AsyncGenerator[bytes, None]:
        try:
            handle = await aiofiles.open(path, "rb")
        except FileNotFoundError:
            raise BlobNotFoundError(f"Blob {blob_id} not found") from None

        bytes_streamed = 0
        try:
            while True:
                piece = await handle.read(self.piece_size)
                if not piece:
                    break
                bytes_streamed += len(piece)
                yield piece
            logger.debug(f"Streamed blob [blob_id={blob_id}] [bytes={bytes_streamed}]")
        finally:
            await handle.close()

    def delete(self, blob_id: str) -> bool:
        """
        Delete blob file from disk.

        Deleting an unknown id is not an error.

        Args:
            blob_id: Id of the blob

        Returns:
            True if a blob was deleted, False if it didn't exist
        """
        try:
            self.get_blob_path(blob_id).unlink()
        except FileNotFoundError:
            return False
        return True

    def exists(self, blob_id: str) -> bool:
        """
        Check if a committed blob exists on disk.

        Args:
            blob_id: Id of the blob

        Returns:
            True if blob file exists, False otherwise
        """
        return self.get_blob_path(blob_id).exists()

