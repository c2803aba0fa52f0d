"""Shared pytest fixtures for all tests."""

from typing import AsyncIterator, Callable

import pytest

from common.types import Actor
from docstore.context import StorageContext, create_storage_context


@pytest.fixture
def storage_context(tmp_path) -> StorageContext:
    """
    Create a storage context backed by a temporary database and blob directory.

    Args:
        tmp_path: pytest tmp_path fixture

    Returns:
        StorageContext with an initialized schema
    """
    return create_storage_context(
        database_path=str(tmp_path / "docstore.db"),
        blob_path=str(tmp_path / "blobs"),
        max_upload_bytes=1024 * 1024,
        recent_events_limit=10,
    )


@pytest.fixture
def owner() -> Actor:
    return Actor(id="u-1", email="alice@example.com")


@pytest.fixture
def other_actor() -> Actor:
    return Actor(id="u-2", email="bob@example.com")


@pytest.fixture
def admin_actor() -> Actor:
    return Actor(id="u-3", email="root@example.com", is_admin=True)


@pytest.fixture
def make_stream() -> Callable[..., AsyncIterator[bytes]]:
    """
    Factory turning bytes into an async stream of fixed-size pieces.
    """
    def _make(data: bytes, piece_size: int = 256) -> AsyncIterator[bytes]:
        async def _gen():
            for start in range(0, len(data), piece_size):
                yield data[start:start + piece_size]
        return _gen()

    return _make
