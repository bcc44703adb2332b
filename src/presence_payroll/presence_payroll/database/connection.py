from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Optional

import mysql.connector


@dataclass(frozen=True)
class DBConfig:
    host: str
    port: int
    user: str
    password: str
    database: str

    @classmethod
    def from_settings(cls, db_config: Mapping[str, object]) -> "DBConfig":
        return cls(
            host=str(db_config.get("host", "localhost")),
            port=int(db_config.get("port", 3306)),  # type: ignore[arg-type]
            user=str(db_config.get("user", "root")),
            password=str(db_config.get("password", "")),
            database=str(db_config.get("database", "payroll_db")),
        )


class DatabaseConnection:
    """Singleton-like DB connection factory.

    Note: One short-lived connection per repository call; a payroll run issues a
    handful of bulk reads and one write per employee, so pooling is not needed.
    """

    _instance: Optional["DatabaseConnection"] = None

    def __init__(self, config: DBConfig):
        self._config = config

    @property
    def config(self) -> DBConfig:
        return self._config

    @classmethod
    def get_instance(cls, config: DBConfig) -> "DatabaseConnection":
        if cls._instance is None or cls._instance.config != config:
            cls._instance = DatabaseConnection(config)
        return cls._instance

    def connect(self):
        return mysql.connector.connect(
            host=self._config.host,
            port=int(self._config.port),
            user=self._config.user,
            password=self._config.password,
            database=self._config.database,
            autocommit=False,
        )
