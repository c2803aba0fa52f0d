"""Utility helper functions for the document store."""

import uuid
from datetime import datetime, timezone
from typing import Optional

from common.constants import ROOT_FOLDER_ID


def generate_uuid() -> str:
    """
    Generate a new UUID4 hex string.

    Returns:
        UUID4 hex string
    """
    return uuid.uuid4().hex


def utc_now() -> datetime:
    """
    Get the current time as a timezone-aware UTC datetime.
    """
    return datetime.now(timezone.utc)


def normalize_folder_id(folder_id: Optional[str]) -> Optional[str]:
    """
    Map the "root" sentinel and empty values to None.

    Args:
        folder_id: Folder id as received from a caller

    Returns:
        Stored folder id, or None for the implicit root
    """
    if folder_id is None:
        return None
    folder_id = folder_id.strip()
    if not folder_id or folder_id == ROOT_FOLDER_ID:
        return None
    return folder_id
