"""Common schemas used across multiple endpoints."""

from typing import Optional

from pydantic import BaseModel

from common.types import Actor


class ErrorResponse(BaseModel):
    """Response model for errors."""
    detail: str
    code: str


class ActorResponse(BaseModel):
    """Identity that performed an action."""
    id: Optional[str] = None
    email: str


def actor_response(actor: Actor) -> ActorResponse:
    return ActorResponse(id=actor.id, email=actor.email)
