from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterable

from werkzeug.security import generate_password_hash

from .connection import DatabaseConnection, DBConfig

logger = logging.getLogger(__name__)

DEMO_ACCOUNTS = (
    # username, email, password, role, employee_code
    ("admin", "admin@example.com", "admin123", "Admin", None),
    ("asha", "asha.rao@example.com", "hr12345", "HR", "EMP001"),
    ("vikram", "vikram.iyer@example.com", "emp12345", "Employee", "EMP002"),
)


def _strip_create_db_and_use(sql: str) -> str:
    # Keep schema.sql usable regardless of the configured DB name.
    sql = re.sub(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$", "", sql)
    sql = re.sub(r"(?im)^\s*USE\b.*?;\s*$", "", sql)
    return sql


def _strip_line_comments(sql: str) -> str:
    return re.sub(r"(?m)^\s*--.*$", "", sql)


def _iter_sql_statements(sql: str) -> Iterable[str]:
    # Minimal SQL splitter for schema/seed files (handles ';' inside quotes).
    buf: list[str] = []
    in_single = False
    in_double = False
    escape = False

    for ch in sql:
        if escape:
            buf.append(ch)
            escape = False
            continue

        if ch == "\\":
            buf.append(ch)
            escape = True
            continue

        if ch == "'" and not in_double:
            in_single = not in_single
        elif ch == '"' and not in_single:
            in_double = not in_double
        elif ch == ";" and not in_single and not in_double:
            stmt = "".join(buf).strip()
            buf.clear()
            if stmt:
                yield stmt
            continue

        buf.append(ch)

    tail = "".join(buf).strip()
    if tail:
        yield tail


def _run_sql_file(conn_factory: DatabaseConnection, path: Path) -> int:
    sql = _strip_line_comments(_strip_create_db_and_use(path.read_text(encoding="utf-8")))
    conn = conn_factory.connect()
    count = 0
    try:
        cur = conn.cursor()
        for stmt in _iter_sql_statements(sql):
            cur.execute(stmt)
            count += 1
        conn.commit()
    finally:
        conn.close()
    return count


def ensure_database_exists(conn_factory: DatabaseConnection) -> None:
    database = conn_factory.config.database
    conn = conn_factory.connect(with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(db_config: dict, *, schema_path: str | Path) -> None:
    conn_factory = DatabaseConnection(DBConfig.from_dict(db_config))
    ensure_database_exists(conn_factory)
    count = _run_sql_file(conn_factory, Path(schema_path))
    logger.info("schema applied (%d statements) to %s", count, conn_factory.config.database)


def apply_seed_sql(db_config: dict, *, seed_path: str | Path) -> None:
    conn_factory = DatabaseConnection(DBConfig.from_dict(db_config))
    count = _run_sql_file(conn_factory, Path(seed_path))
    logger.info("seed applied (%d statements) to %s", count, conn_factory.config.database)


def ensure_demo_accounts(db_config: dict) -> None:
    """Create or refresh the demo login accounts (one per privileged role + one employee)."""

    conn = DatabaseConnection(DBConfig.from_dict(db_config)).connect()
    try:
        cur = conn.cursor(dictionary=True)

        for username, email, password, role, employee_code in DEMO_ACCOUNTS:
            employee_id = None
            if employee_code:
                cur.execute("SELECT employee_id FROM employees WHERE employee_code=%s", (employee_code,))
                row = cur.fetchone()
                if not row:
                    raise RuntimeError(f"Missing employees row for employee_code={employee_code}")
                employee_id = int(row["employee_id"])

            password_hash = generate_password_hash(password)
            cur.execute("SELECT user_id FROM auth_users WHERE username=%s", (username,))
            if cur.fetchone():
                cur.execute(
                    """
                    UPDATE auth_users
                    SET email=%s, password_hash=%s, role=%s, employee_id=%s, is_active=1
                    WHERE username=%s
                    """,
                    (email, password_hash, role, employee_id, username),
                )
            else:
                cur.execute(
                    """
                    INSERT INTO auth_users (username, email, password_hash, role, employee_id)
                    VALUES (%s, %s, %s, %s, %s)
                    """,
                    (username, email, password_hash, role, employee_id),
                )

        conn.commit()
    finally:
        conn.close()


def list_tables(db_config: dict) -> list[str]:
    conn = DatabaseConnection(DBConfig.from_dict(db_config)).connect()
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()
