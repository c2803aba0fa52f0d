"""Audit event repository. Append and query only."""

from datetime import datetime
from typing import List

from common.logging_config import get_logger
from common.types import Actor, AuditTarget
from docstore.database import Database
from docstore.domain import AuditAction, AuditEvent

logger = get_logger(__name__)

EVENT_COLUMNS = """
    ts, actor_id, actor_email, actor_is_admin, action, target_type, target_id, target_name,
    from_folder_id, to_folder_id
"""


class EventRepository:
    def __init__(self, db: Database):
        self.db = db

    def append(self, event: AuditEvent) -> AuditEvent:
        with self.db.connection() as conn:
            cursor = conn.execute(
                f"""
                INSERT INTO file_events ({EVENT_COLUMNS})
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    event.ts.isoformat(),
                    event.actor.id,
                    event.actor.email,
                    int(event.actor.is_admin),
                    event.action.value,
                    event.target.type,
                    event.target.id,
                    event.target.name,
                    event.from_folder_id,
                    event.to_folder_id,
                )
            )
            conn.commit()
            event_id = cursor.lastrowid

        return AuditEvent(
            ts=event.ts,
            actor=event.actor,
            action=event.action,
            target=event.target,
            from_folder_id=event.from_folder_id,
            to_folder_id=event.to_folder_id,
            event_id=event_id,
        )

    def recent_for_target(self, target_id: str, limit: int) -> List[AuditEvent]:
        """
        Most recent events about target_id, newest first.
        """
        with self.db.connection() as conn:
            rows = conn.execute(
                f"""
                SELECT event_id, {EVENT_COLUMNS} FROM file_events
                WHERE target_id = ?
                ORDER BY ts DESC, event_id DESC
                LIMIT ?
                """,
                (target_id, limit)
            ).fetchall()
            return [self._row_to_event(row) for row in rows]

    def recent_for_actor(self, actor_email: str, limit: int) -> List[AuditEvent]:
        """
        Most recent events performed by actor_email, newest first.
        """
        with self.db.connection() as conn:
            rows = conn.execute(
                f"""
                SELECT event_id, {EVENT_COLUMNS} FROM file_events
                WHERE actor_email = ?
                ORDER BY ts DESC, event_id DESC
                LIMIT ?
                """,
                (actor_email, limit)
            ).fetchall()
            return [self._row_to_event(row) for row in rows]

    @staticmethod
    def _row_to_event(row) -> AuditEvent:
        return AuditEvent(
            ts=datetime.fromisoformat(row["ts"]),
            actor=Actor(id=row["actor_id"], email=row["actor_email"], is_admin=bool(row["actor_is_admin"])),
            action=AuditAction(row["action"]),
            target=AuditTarget(type=row["target_type"], id=row["target_id"], name=row["target_name"]),
            from_folder_id=row["from_folder_id"],
            to_folder_id=row["to_folder_id"],
            event_id=row["event_id"],
        )
