from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterable, Mapping

import mysql.connector

from .connection import DBConfig

logger = logging.getLogger(__name__)


def _strip_create_db_and_use(sql: str) -> str:
    # Keep schema.sql usable whatever the configured database name is.
    sql = re.sub(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$", "", sql)
    sql = re.sub(r"(?im)^\s*USE\b.*?;\s*$", "", sql)
    return sql


def _iter_sql_statements(sql: str) -> Iterable[str]:
    # Minimal SQL splitter for the schema file (handles ';' inside quotes and -- comments).
    buf: list[str] = []
    in_single = False
    in_double = False
    in_comment = False
    escape = False
    prev = ""

    for ch in sql:
        if in_comment:
            if ch == "\n":
                in_comment = False
                buf.append(ch)
            prev = ch
            continue

        if escape:
            buf.append(ch)
            escape = False
        elif ch == "\\":
            buf.append(ch)
            escape = True
        elif ch == "-" and prev == "-" and not in_single and not in_double:
            buf.pop()
            in_comment = True
        elif ch == "'" and not in_double:
            in_single = not in_single
            buf.append(ch)
        elif ch == '"' and not in_single:
            in_double = not in_double
            buf.append(ch)
        elif ch == ";" and not in_single and not in_double:
            stmt = "".join(buf).strip()
            buf.clear()
            if stmt:
                yield stmt
        else:
            buf.append(ch)
        prev = ch

    tail = "".join(buf).strip()
    if tail:
        yield tail


def _connect(target: DBConfig, *, with_database: bool = True):
    kwargs = dict(host=target.host, port=target.port, user=target.user, password=target.password, use_pure=True)
    if with_database:
        kwargs["database"] = target.database
    return mysql.connector.connect(**kwargs)


def ensure_database_exists(db_config: Mapping[str, object]) -> None:
    target = DBConfig.from_settings(db_config)
    conn = _connect(target, with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{target.database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci;"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(db_config: Mapping[str, object], *, schema_path: str | Path) -> None:
    ensure_database_exists(db_config)
    target = DBConfig.from_settings(db_config)
    sql = _strip_create_db_and_use(Path(schema_path).read_text(encoding="utf-8"))

    conn = _connect(target)
    try:
        cur = conn.cursor()
        count = 0
        for stmt in _iter_sql_statements(sql):
            cur.execute(stmt)
            count += 1
        conn.commit()
        logger.info("Applied %d schema statement(s) to %s", count, target.database)
    finally:
        conn.close()


def list_tables(db_config: Mapping[str, object]) -> list[str]:
    conn = _connect(DBConfig.from_settings(db_config))
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()
