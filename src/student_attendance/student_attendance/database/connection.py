from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import mysql.connector


@dataclass(frozen=True)
class DBConfig:
    host: str = "localhost"
    port: int = 3306
    user: str = "root"
    password: str = ""
    database: str = "student_attendance"

    @classmethod
    def from_dict(cls, db_config: dict) -> "DBConfig":
        defaults = cls()
        return cls(
            host=str(db_config.get("host") or defaults.host),
            port=int(db_config.get("port") or defaults.port),
            user=str(db_config.get("user") or defaults.user),
            password=str(db_config.get("password") or ""),
            database=str(db_config.get("database") or defaults.database),
        )

    def connect_kwargs(self, *, with_database: bool = True) -> dict:
        kwargs = {"host": self.host, "port": self.port, "user": self.user, "password": self.password}
        if with_database:
            kwargs["database"] = self.database
        return kwargs

    def describe(self) -> str:
        return f"{self.user}@{self.host}:{self.port}/{self.database}"


class DatabaseConnection:
    """Process-wide connection factory.

    Every repository call opens its own short-lived connection; there is no pool.
    """

    _instance: Optional["DatabaseConnection"] = None

    def __init__(self, config: DBConfig):
        self._config = config

    @classmethod
    def get_instance(cls, config: DBConfig) -> "DatabaseConnection":
        if cls._instance is None or cls._instance.config != config:
            cls._instance = DatabaseConnection(config)
        return cls._instance

    @property
    def config(self) -> DBConfig:
        return self._config

    def connect(self, *, autocommit: bool = False):
        return mysql.connector.connect(**self._config.connect_kwargs(), autocommit=autocommit)
