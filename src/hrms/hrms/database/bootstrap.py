from __future__ import annotations

import logging
import re
from datetime import date
from pathlib import Path
from typing import Iterable

from werkzeug.security import generate_password_hash

from .connection import DatabaseConnection, DBConfig

logger = logging.getLogger(__name__)


def _strip_create_db_and_use(sql: str) -> str:
    # schema.sql stays usable regardless of the configured DB name.
    sql = re.sub(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$", "", sql)
    sql = re.sub(r"(?im)^\s*USE\b.*?;\s*$", "", sql)
    return sql


def iter_sql_statements(sql: str) -> Iterable[str]:
    """Split a script on ';' outside of quoted strings."""
    buf: list[str] = []
    quote = None
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
        if ch in ("'", '"'):
            if quote is None:
                quote = ch
            elif quote == ch:
                quote = None
        if ch == ";" and quote is None:
            stmt = "".join(buf).strip()
            buf.clear()
            if stmt:
                yield stmt
            continue
        buf.append(ch)

    tail = "".join(buf).strip()
    if tail:
        yield tail


def _factory(db_config: dict) -> DatabaseConnection:
    return DatabaseConnection(DBConfig.from_dict(db_config))


def ensure_database_exists(db_config: dict) -> None:
    factory = _factory(db_config)
    conn = factory.connect(with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{factory.config.database}` "
            "CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci;"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(db_config: dict, *, schema_path: str | Path) -> None:
    ensure_database_exists(db_config)
    sql = _strip_create_db_and_use(Path(schema_path).read_text(encoding="utf-8"))

    conn = _factory(db_config).connect()
    try:
        cur = conn.cursor()
        for stmt in iter_sql_statements(sql):
            cur.execute(stmt)
        conn.commit()
    finally:
        conn.close()
    logger.info("Schema applied from %s", schema_path)


def ensure_demo_data(db_config: dict) -> None:
    """Upsert one admin login and one demo employee with its login."""
    conn = _factory(db_config).connect()
    try:
        cur = conn.cursor(dictionary=True)

        cur.execute("SELECT row_id FROM employees WHERE employee_id=%s", ("EMP001",))
        if not cur.fetchone():
            cur.execute(
                """
                INSERT INTO employees
                    (employee_id, employee_code, name, email, username, department, position, salary, joining_date, phone)
                VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s, %s)
                """,
                ("EMP001", "E-0001", "Demo Employee", "demo@example.com", "demo", "Engineering",
                 "Developer", 30000, date.today(), ""),
            )

        def upsert_user(username: str, password: str, role: str, employee_id, name: str) -> None:
            password_hash = generate_password_hash(password)
            cur.execute("SELECT user_id FROM users WHERE username=%s", (username,))
            if cur.fetchone():
                cur.execute(
                    "UPDATE users SET password_hash=%s, role=%s, employee_id=%s, name=%s, is_active=1 WHERE username=%s",
                    (password_hash, role, employee_id, name, username),
                )
            else:
                cur.execute(
                    "INSERT INTO users (username, password_hash, role, employee_id, name) VALUES (%s, %s, %s, %s, %s)",
                    (username, password_hash, role, employee_id, name),
                )

        upsert_user("admin", "admin123", "admin", None, "Administrator")
        upsert_user("demo", "demo123", "employee", "EMP001", "Demo Employee")
        conn.commit()
    finally:
        conn.close()
    logger.info("Demo data ready")


def list_tables(db_config: dict) -> list[str]:
    conn = _factory(db_config).connect()
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()
