"""Shared data type definitions (Actor, AuditTarget)."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Actor:
    """
    Authenticated identity an operation is performed for.

    Resolved once by the portal and passed down explicitly.
    """
    id: Optional[str]
    email: str
    is_admin: bool = False


@dataclass(frozen=True)
class AuditTarget:
    """
    Weak reference to the file or folder an audit event is about.
    """
    type: str
    id: str
    name: str
