# Overview: Service-layer operations for the audit log.

from __future__ import annotations

from datetime import datetime
from typing import Optional

from ..models import AuditLogEntry, User
from ..state import AppState
from pharmapos.time_utils import utcnow
from .document_service import next_document_number
"""
PharmaPOS Audit Log Invariants (authoritative)

- Append-only record of sensitive actions (sales, catalog changes, user and
  settings administration, backups, data clears).
- No domain/business logic in the audit log itself.
- Entries are written by the same service call that performs the action,
  after the action has succeeded.
"""


def append_audit_event(
    state: AppState,
    *,
    action: str,
    details: str,
    actor: User | None = None,
    occurred_at: Optional[datetime] = None,
) -> AuditLogEntry:
    """
    Append-only audit event.

    - No domain logic here.
    - No deletes/updates of existing entries.
    """
    entry = AuditLogEntry(
        id=next_document_number(state, document_type="AUDIT", prefix="A"),
        timestamp=occurred_at or utcnow(),
        user_id=actor.id if actor else None,
        user_name=actor.name if actor else None,
        action=action,
        details=details,
    )
    return state.audit_log.append(entry)


def list_audit_events(state: AppState, *, action: str | None = None, limit: int | None = None) -> list[AuditLogEntry]:
    """Newest first, optionally filtered by action code."""
    entries = state.audit_log.newest_first()
    if action:
        entries = [e for e in entries if e.action == action]
    if limit is not None:
        entries = entries[:max(limit, 0)]
    return entries
