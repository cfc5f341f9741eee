from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from pharmapos.time_utils import to_utc_z


@dataclass(frozen=True)
class AuditLogEntry:
    """Append-only record of a sensitive action. Never updated or deleted."""
    id: str
    timestamp: datetime
    user_id: str | None
    user_name: str | None
    action: str
    details: str

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "timestamp": to_utc_z(self.timestamp),
            "user_id": self.user_id,
            "user_name": self.user_name,
            "action": self.action,
            "details": self.details,
        }


@dataclass
class ConfirmationRequest:
    """Pending two-phase decision; consumed at most once."""
    token: str
    action: str
    subject: str
    user_id: str
    reason: str
    created_at: datetime
    expires_at: datetime

    def to_dict(self) -> dict:
        return {
            "token": self.token,
            "action": self.action,
            "subject": self.subject,
            "reason": self.reason,
            "expires_at": to_utc_z(self.expires_at),
        }
