from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import PRIVILEGED_ROLES, Role


@dataclass(frozen=True)
class Employee:
    """Domain entity: an employee as seen by the attendance workflow.

    Note: plain data object, no database access.
    """

    employee_id: int
    employee_code: str
    full_name: str
    email: str
    department_name: Optional[str] = None
    is_active: bool = True


@dataclass(frozen=True)
class AuthUser:
    user_id: int
    username: str
    email: str
    password_hash: str
    role: Role
    employee_id: Optional[int] = None
    is_active: bool = True
    last_login_at: Optional[datetime] = None


@dataclass(frozen=True)
class CurrentUser:
    """The authenticated caller, passed explicitly into every service operation."""

    user_id: int
    username: str
    role: Role
    employee_id: Optional[int] = None

    @property
    def is_privileged(self) -> bool:
        return self.role in PRIVILEGED_ROLES

    def can_act_for(self, employee_id: int) -> bool:
        return self.is_privileged or self.employee_id == int(employee_id)

    def to_session(self) -> dict:
        return {
            "user_id": self.user_id,
            "username": self.username,
            "role": self.role.value,
            "employee_id": self.employee_id,
        }

    @classmethod
    def from_session(cls, data: dict) -> "CurrentUser":
        employee_id = data.get("employee_id")
        return cls(
            user_id=int(data["user_id"]),
            username=str(data["username"]),
            role=Role(data["role"]),
            employee_id=int(employee_id) if employee_id is not None else None,
        )
