from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import AuthUser, Employee
from .repository import AuthUserRepository, EmployeeRepository

_EMPLOYEE_COLUMNS = """
    e.employee_id, e.employee_code,
    CONCAT(e.first_name, ' ', e.last_name) AS full_name,
    e.email, d.name AS department_name, e.is_active
"""


def _to_employee(row: dict) -> Employee:
    return Employee(
        employee_id=int(row["employee_id"]),
        employee_code=row["employee_code"],
        full_name=row["full_name"],
        email=row["email"],
        department_name=row.get("department_name"),
        is_active=bool(row.get("is_active", True)),
    )


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_EMPLOYEE_COLUMNS}
                FROM employees e
                LEFT JOIN departments d ON d.department_id = e.department_id
                WHERE e.employee_id=%s AND e.deleted_at IS NULL
                """,
                (int(employee_id),),
            )
            row = fetchone(cur)
            return _to_employee(row) if row else None

    def list_active(self) -> Sequence[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_EMPLOYEE_COLUMNS}
                FROM employees e
                LEFT JOIN departments d ON d.department_id = e.department_id
                WHERE e.is_active=1 AND e.deleted_at IS NULL
                ORDER BY e.employee_id ASC
                """
            )
            return [_to_employee(r) for r in fetchall(cur)]


class MySQLAuthUserRepository(AuthUserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_username(self, username: str) -> Optional[AuthUser]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT user_id, username, email, password_hash, role, employee_id, is_active, last_login_at
                FROM auth_users
                WHERE username=%s
                """,
                (username,),
            )
            row = fetchone(cur)
            if not row:
                return None
            return AuthUser(
                user_id=int(row["user_id"]),
                username=row["username"],
                email=row["email"],
                password_hash=row["password_hash"],
                role=Role(row["role"]),
                employee_id=int(row["employee_id"]) if row.get("employee_id") is not None else None,
                is_active=bool(row.get("is_active", True)),
                last_login_at=row.get("last_login_at"),
            )

    def touch_last_login(self, user_id: int, *, at: datetime) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE auth_users SET last_login_at=%s WHERE user_id=%s", (at, int(user_id)))
