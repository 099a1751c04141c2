"""SQLite store for Webflow credentials, with environment-variable fallback."""

from __future__ import annotations

import os
import sqlite3
from dataclasses import dataclass
from pathlib import Path

DEFAULT_DB_PATH = Path.home() / ".blog-fact-checker" / "credentials.db"

TOKEN_ENV = "WEBFLOW_API_TOKEN"
COLLECTION_ENV = "WEBFLOW_COLLECTION_ID"


@dataclass(frozen=True)
class WebflowCredentials:
    api_token: str | None = None
    collection_id: str | None = None

    @property
    def complete(self) -> bool:
        return bool(self.api_token and self.collection_id)

    @property
    def masked_token(self) -> str:
        if not self.api_token:
            return "(not set)"
        return f"{self.api_token[:4]}...{self.api_token[-4:]}" if len(self.api_token) > 8 else "****"


class CredentialStore:
    """Key/value credential table. Stored values win over the environment."""

    def __init__(self, db_path: str | Path = DEFAULT_DB_PATH):
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._init_db()

    def _init_db(self) -> None:
        with self._connect() as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS credentials (
                    name TEXT PRIMARY KEY,
                    value TEXT NOT NULL
                )
            """)

    def _connect(self) -> sqlite3.Connection:
        return sqlite3.connect(str(self.db_path))

    def _read(self) -> dict[str, str]:
        with self._connect() as conn:
            rows = conn.execute("SELECT name, value FROM credentials").fetchall()
        return dict(rows)

    def get(self) -> WebflowCredentials:
        """Stored credentials, each missing value taken from the environment."""
        stored = self._read()
        return WebflowCredentials(
            api_token=stored.get("api_token") or os.environ.get(TOKEN_ENV),
            collection_id=stored.get("collection_id") or os.environ.get(COLLECTION_ENV),
        )

    def save(self, api_token: str, collection_id: str) -> None:
        if not api_token.strip() or not collection_id.strip():
            raise ValueError("API token and collection ID must both be non-empty")
        with self._connect() as conn:
            conn.executemany(
                "INSERT OR REPLACE INTO credentials (name, value) VALUES (?, ?)",
                [("api_token", api_token.strip()), ("collection_id", collection_id.strip())],
            )

    def clear(self) -> int:
        """Delete stored credentials. Returns count of deleted rows."""
        with self._connect() as conn:
            cursor = conn.execute("DELETE FROM credentials")
            return cursor.rowcount
