from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from .model import AuthUser, Employee


class EmployeeRepository(Protocol):
    """Read-only employee directory.

    Note (DIP): services depend on this interface, not on a concrete database.
    """

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        raise NotImplementedError

    def list_active(self) -> Sequence[Employee]:
        raise NotImplementedError


class AuthUserRepository(Protocol):
    def get_by_username(self, username: str) -> Optional[AuthUser]:
        raise NotImplementedError

    def touch_last_login(self, user_id: int, *, at: datetime) -> None:
        raise NotImplementedError
