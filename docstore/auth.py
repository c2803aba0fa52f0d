"""Actor resolution for requests forwarded by the portal."""

from typing import Optional

from fastapi import Header, HTTPException, status

from common.types import Actor
from docstore.config import ADMIN_ROLE


async def get_current_actor(
    x_actor_email: Optional[str] = Header(None),
    x_actor_id: Optional[str] = Header(None),
    x_actor_role: Optional[str] = Header(None),
) -> Actor:
    """
    FastAPI dependency building the Actor from headers set by the portal's
    session layer.

    Args:
        x_actor_email: X-Actor-Email header (required)
        x_actor_id: X-Actor-Id header
        x_actor_role: X-Actor-Role header; "admin" grants the admin capability

    Returns:
        Actor for the current request

    Raises:
        HTTPException: 401 if no actor email was forwarded
    """
    email = (x_actor_email or "").strip()
    if not email:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing X-Actor-Email header"
        )

    role = (x_actor_role or "").strip().lower()
    return Actor(id=x_actor_id or None, email=email, is_admin=role == ADMIN_ROLE)
