"""Append-only audit trail over file and folder actions."""

from typing import List, Optional

from common.logging_config import get_logger
from common.types import Actor, AuditTarget
from docstore.context import StorageContext
from docstore.domain import AuditAction, AuditEvent
from docstore.repositories.event_repository import EventRepository
from docstore.utils import utc_now

logger = get_logger(__name__)


class AuditTrail:
    def __init__(self, context: StorageContext):
        self.event_repo = EventRepository(context.database)
        self.default_limit = context.recent_events_limit

    def record(self, event: AuditEvent) -> AuditEvent:
        stored = self.event_repo.append(event)
        logger.info(
            f"Audit {event.action.value} {event.target.type} [target_id={event.target.id}] "
            f"[actor={event.actor.email}]"
        )
        return stored

    def record_action(
        self,
        actor: Actor,
        action: AuditAction,
        target: AuditTarget,
        from_folder_id: Optional[str] = None,
        to_folder_id: Optional[str] = None,
    ) -> AuditEvent:
        return self.record(AuditEvent(
            ts=utc_now(),
            actor=actor,
            action=action,
            target=target,
            from_folder_id=from_folder_id,
            to_folder_id=to_folder_id,
        ))

    def recent_for_target(self, target_id: str, limit: Optional[int] = None) -> List[AuditEvent]:
        return self.event_repo.recent_for_target(target_id, limit or self.default_limit)

    def recent_for_actor(self, actor_email: str, limit: Optional[int] = None) -> List[AuditEvent]:
        return self.event_repo.recent_for_actor(actor_email, limit or self.default_limit)
