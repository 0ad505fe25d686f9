"""Schema bootstrap for the worktime database.

database/schema.sql carries its own CREATE DATABASE/USE lines for manual use
with the mysql client; here they are dropped so the configured database name
wins.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterator, Optional

from .connection import DatabaseConnection
from .mysql_base import db_cursor

logger = logging.getLogger(__name__)

_DATABASE_SWITCH = re.compile(r"(?im)^\s*(CREATE\s+DATABASE|USE)\b[^;]*;\s*$")
_LINE_COMMENT = re.compile(r"(?m)^\s*--.*$")


def iter_sql_statements(script: str) -> Iterator[str]:
    """Split a SQL script on top-level ';' (semicolons in quoted literals are kept)."""
    script = _LINE_COMMENT.sub("", _DATABASE_SWITCH.sub("", script))

    start = 0
    quote: Optional[str] = None
    i = 0
    while i < len(script):
        ch = script[i]
        if quote:
            if ch == "\\":
                i += 1
            elif ch == quote:
                quote = None
        elif ch in ("'", '"'):
            quote = ch
        elif ch == ";":
            stmt = script[start:i].strip()
            if stmt:
                yield stmt
            start = i + 1
        i += 1

    tail = script[start:].strip()
    if tail:
        yield tail


def ensure_database_exists(conn_factory: DatabaseConnection) -> None:
    conn = conn_factory.connect(with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{conn_factory.config.database}` "
            "CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(conn_factory: DatabaseConnection, *, schema_path: Path) -> int:
    """Create the database if needed and run every statement of `schema_path`."""
    ensure_database_exists(conn_factory)
    statements = list(iter_sql_statements(Path(schema_path).read_text(encoding="utf-8")))

    with db_cursor(conn_factory, dictionary=False) as (_, cur):
        for stmt in statements:
            cur.execute(stmt)

    logger.info("schema applied to %s (%s statements)", conn_factory.config.describe(), len(statements))
    return len(statements)


def list_tables(conn_factory: DatabaseConnection) -> list[str]:
    with db_cursor(conn_factory, dictionary=False) as (_, cur):
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
