"""SQLite persistence for the report configuration."""

from __future__ import annotations

import os
import sqlite3
from dataclasses import dataclass
from pathlib import Path

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS app_config (
    key TEXT PRIMARY KEY,
    value TEXT NOT NULL
);
"""

CONFIG_ENV_VAR = "REPORT_BUILDER_CONFIG"


class ConfigError(RuntimeError):
    """Raised when the stored configuration is missing or unusable."""


@dataclass(frozen=True)
class AppConfig:
    """Persisted configuration."""

    share_path: str


def default_config_path() -> Path:
    """Config database path: $REPORT_BUILDER_CONFIG or ~/.config/report_builder."""
    override = os.environ.get(CONFIG_ENV_VAR, "").strip()
    if override:
        return Path(override).expanduser()
    return Path.home() / ".config" / "report_builder" / "report_builder.sqlite3"


class ConfigStore:
    """Key/value SQLite store for AppConfig."""

    def __init__(self, db_path: Path) -> None:
        self._db_path = db_path

    @property
    def path(self) -> Path:
        return self._db_path

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self._db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def save_config(self, config: AppConfig) -> None:
        """Create the database if needed and upsert the configuration."""
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        with self._connect() as conn:
            conn.executescript(SCHEMA_SQL)
            conn.execute(
                """
                INSERT INTO app_config(key, value) VALUES(?, ?)
                ON CONFLICT(key) DO UPDATE SET value=excluded.value
                """,
                ("share_path", config.share_path),
            )
            conn.commit()

    def load_config(self) -> AppConfig:
        """Load the saved configuration.

        Raises:
            ConfigError: If nothing was saved yet or share_path is empty.
        """
        if not self._db_path.exists():
            raise ConfigError(
                "No configuration found. Please run `report-builder init` first."
            )
        with self._connect() as conn:
            conn.executescript(SCHEMA_SQL)
            rows = conn.execute("SELECT key, value FROM app_config").fetchall()
        values = {row["key"]: row["value"] for row in rows}
        share_path = values.get("share_path", "")
        if not share_path.strip():
            raise ConfigError(
                f"share_path in {self._db_path} is empty. "
                "Re-run `report-builder init`."
            )
        return AppConfig(share_path=share_path)
