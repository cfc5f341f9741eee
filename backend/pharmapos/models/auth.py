from __future__ import annotations

from dataclasses import dataclass


ROLE_ADMIN = "admin"
ROLE_PHARMACIST = "pharmacist"
ROLE_CASHIER = "cashier"
ROLES = (ROLE_ADMIN, ROLE_PHARMACIST, ROLE_CASHIER)

STATUS_ACTIVE = "active"
STATUS_INACTIVE = "inactive"
USER_STATUSES = (STATUS_ACTIVE, STATUS_INACTIVE)


@dataclass
class User:
    """Staff member. The email doubles as the login identifier."""
    id: str
    name: str
    email: str
    role: str
    status: str = STATUS_ACTIVE

    @property
    def is_active(self) -> bool:
        return self.status == STATUS_ACTIVE

    def __repr__(self) -> str:
        return f"<User id={self.id!r} email={self.email!r} role={self.role!r}>"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "role": self.role,
            "status": self.status,
        }
