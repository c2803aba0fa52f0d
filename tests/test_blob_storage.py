"""Tests for the on-disk blob store."""

import pytest

from docstore.blob_storage import BlobStore
from docstore.exceptions import BlobNotFoundError, UploadTooLargeError


@pytest.fixture
def blob_store(tmp_path) -> BlobStore:
    store = BlobStore(tmp_path / "blobs", piece_size=100)
    store.ensure_directory()
    return store


async def read_all(store: BlobStore, blob_id: str) -> bytes:
    data = bytearray()
    async for piece in store.open_read(blob_id):
        data.extend(piece)
    return bytes(data)


class TestBlobWrite:
    """Test streamed writes and their visibility to readers."""

    @pytest.mark.asyncio
    async def test_write_then_read(self, blob_store):
        payload = bytes(range(256)) * 4

        async with blob_store.open_write() as writer:
            blob_id = writer.blob_id
            for start in range(0, len(payload), 300):
                await writer.write(payload[start:start + 300])

        assert writer.bytes_written == len(payload)
        assert blob_store.exists(blob_id)
        assert await read_all(blob_store, blob_id) == payload

    @pytest.mark.asyncio
    async def test_blob_invisible_until_write_completes(self, blob_store):
        async with blob_store.open_write() as writer:
            await writer.write(b"partial")
            assert not blob_store.exists(writer.blob_id)
            with pytest.raises(BlobNotFoundError):
                blob_store.open_read(writer.blob_id)

        assert blob_store.exists(writer.blob_id)

    @pytest.mark.asyncio
    async def test_failed_write_leaves_nothing_behind(self, blob_store):
        with pytest.raises(RuntimeError):
            async with blob_store.open_write() as writer:
                await writer.write(b"some bytes")
                raise RuntimeError("client went away")

        assert not blob_store.exists(writer.blob_id)
        assert list(blob_store.root.iterdir()) == []

    @pytest.mark.asyncio
    async def test_max_size_enforced(self, blob_store):
        with pytest.raises(UploadTooLargeError):
            async with blob_store.open_write(max_size=10) as writer:
                await writer.write(b"12345")
                await writer.write(b"678901")

        assert writer.bytes_written == 5
        assert list(blob_store.root.iterdir()) == []

    @pytest.mark.asyncio
    async def test_empty_blob(self, blob_store):
        async with blob_store.open_write() as writer:
            pass

        assert blob_store.exists(writer.blob_id)
        assert await read_all(blob_store, writer.blob_id) == b""

    @pytest.mark.asyncio
    async def test_each_writer_gets_fresh_id(self, blob_store):
        async with blob_store.open_write() as first:
            await first.write(b"a")
        async with blob_store.open_write() as second:
            await second.write(b"b")

        assert first.blob_id != second.blob_id


class TestBlobReadAndDelete:
    """Test reads of missing blobs, abandoned reads and deletes."""

    def test_open_read_unknown_id(self, blob_store):
        with pytest.raises(BlobNotFoundError):
            blob_store.open_read("does-not-exist")

    @pytest.mark.asyncio
    async def test_abandoned_reader_does_not_affect_next_reader(self, blob_store):
        payload = b"x" * 1000
        async with blob_store.open_write() as writer:
            await writer.write(payload)

        reader = blob_store.open_read(writer.blob_id)
        first_piece = await reader.__anext__()
        assert len(first_piece) == 100
        await reader.aclose()

        assert await read_all(blob_store, writer.blob_id) == payload

    @pytest.mark.asyncio
    async def test_delete_is_idempotent(self, blob_store):
        async with blob_store.open_write() as writer:
            await writer.write(b"data")

        assert blob_store.delete(writer.blob_id) is True
        assert blob_store.delete(writer.blob_id) is False
        assert not blob_store.exists(writer.blob_id)

    def test_delete_unknown_id(self, blob_store):
        assert blob_store.delete("never-written") is False
