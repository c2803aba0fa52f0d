"""Repository layer for data access."""

from docstore.repositories.folder_repository import FolderRepository
from docstore.repositories.file_repository import FileRepository
from docstore.repositories.event_repository import EventRepository

__all__ = [
    "FolderRepository",
    "FileRepository",
    "EventRepository",
]
