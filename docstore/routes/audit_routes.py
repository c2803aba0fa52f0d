"""Audit trail API routes."""

from fastapi import APIRouter, Depends, Query

from docstore.context import StorageContext, get_storage_context
from docstore.schemas.files import AuditEventListResponse, audit_event_response
from docstore.services.audit_trail import AuditTrail

router = APIRouter(prefix="/audit", tags=["Audit"])


@router.get("/events", response_model=AuditEventListResponse)
async def actor_events(
    actor_email: str = Query(..., description="Email of the acting identity"),
    limit: int = Query(50, ge=1, le=500),
    context: StorageContext = Depends(get_storage_context)
):
    """
    Most recent actions performed by one identity, newest first.
    """
    audit = AuditTrail(context)
    events = audit.recent_for_actor(actor_email, limit)
    return AuditEventListResponse(events=[audit_event_response(event) for event in events])
