"""Ranking snapshot storage — one SQLite file holding the full ranking.

The snapshot is rebuilt wholesale on every initialize run. save() writes a
fresh database next to the target and swaps it in with os.replace, so a
reader either sees the previous snapshot or the complete new one.
"""

import os
import sqlite3
import time
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from pathlib import Path

from decayrec import __version__
from decayrec.errors import StoreUnavailableError
from decayrec.ranking import RankedEntry

SCHEMA_VERSION = 1

SCHEMA = """
    CREATE TABLE metadata (
        key TEXT PRIMARY KEY,
        value TEXT NOT NULL
    );
    CREATE TABLE rankings (
        user_id TEXT NOT NULL,
        position INTEGER NOT NULL,
        product_id TEXT NOT NULL,
        score TEXT NOT NULL,
        PRIMARY KEY (user_id, position)
    );
"""


class RankingStore:
    """Persists and loads the user -> ranked products snapshot."""

    def __init__(self, path):
        self.path = Path(path)

    @property
    def tmp_path(self) -> Path:
        return self.path.with_name(self.path.name + ".tmp")

    # --- Write ---

    def save(self, ranking: dict[str, list[RankedEntry]]):
        """Write the whole ranking and publish it atomically."""
        tmp = self.tmp_path
        if tmp.exists():
            tmp.unlink()
        self.path.parent.mkdir(parents=True, exist_ok=True)

        conn = sqlite3.connect(str(tmp))
        try:
            conn.executescript(SCHEMA)
            now = time.time()
            conn.executemany(
                "INSERT INTO metadata (key, value) VALUES (?, ?)",
                [
                    ("schema_version", str(SCHEMA_VERSION)),
                    ("built_at", datetime.fromtimestamp(now, tz=timezone.utc).isoformat()),
                    ("generator", f"decayrec {__version__}"),
                ],
            )
            conn.executemany(
                "INSERT INTO rankings (user_id, position, product_id, score) VALUES (?, ?, ?, ?)",
                (
                    (user_id, position, entry.product_id, str(entry.score))
                    for user_id, entries in ranking.items()
                    for position, entry in enumerate(entries)
                ),
            )
            conn.commit()
        except Exception:
            conn.close()
            tmp.unlink(missing_ok=True)
            raise
        conn.close()
        os.replace(tmp, self.path)

    # --- Read ---

    def _connect(self) -> sqlite3.Connection:
        if not self.path.is_file():
            raise StoreUnavailableError(self.path, StoreUnavailableError.MISSING)
        # Read-only URI so a bad path never creates an empty database.
        uri = f"{self.path.resolve().as_uri()}?mode=ro"
        try:
            conn = sqlite3.connect(uri, uri=True)
        except sqlite3.Error as e:
            raise StoreUnavailableError(self.path, StoreUnavailableError.CORRUPT, str(e)) from e
        conn.row_factory = sqlite3.Row
        return conn

    def _read_metadata(self, conn: sqlite3.Connection) -> dict:
        try:
            rows = conn.execute("SELECT key, value FROM metadata").fetchall()
        except sqlite3.DatabaseError as e:
            raise StoreUnavailableError(self.path, StoreUnavailableError.CORRUPT, str(e)) from e

        meta = {row["key"]: row["value"] for row in rows}
        version = meta.get("schema_version")
        if version is None:
            raise StoreUnavailableError(self.path, StoreUnavailableError.CORRUPT, "no schema version")
        if version != str(SCHEMA_VERSION):
            raise StoreUnavailableError(
                self.path, StoreUnavailableError.INCOMPATIBLE,
                f"schema version {version}, expected {SCHEMA_VERSION}",
            )
        return meta

    def load(self) -> dict[str, list[RankedEntry]]:
        """Read the full snapshot into memory."""
        conn = self._connect()
        try:
            self._read_metadata(conn)
            ranking: dict[str, list[RankedEntry]] = {}
            cursor = conn.execute(
                "SELECT user_id, product_id, score FROM rankings ORDER BY user_id, position"
            )
            for row in cursor:
                ranking.setdefault(row["user_id"], []).append(
                    RankedEntry(row["product_id"], Decimal(row["score"]))
                )
            return ranking
        except (sqlite3.DatabaseError, InvalidOperation) as e:
            raise StoreUnavailableError(self.path, StoreUnavailableError.CORRUPT, str(e)) from e
        finally:
            conn.close()

    def stats(self) -> dict:
        """Snapshot health summary."""
        conn = self._connect()
        try:
            meta = self._read_metadata(conn)
            users = conn.execute("SELECT COUNT(DISTINCT user_id) FROM rankings").fetchone()[0]
            entries = conn.execute("SELECT COUNT(*) FROM rankings").fetchone()[0]
        except sqlite3.DatabaseError as e:
            raise StoreUnavailableError(self.path, StoreUnavailableError.CORRUPT, str(e)) from e
        finally:
            conn.close()
        return {
            "schema_version": int(meta["schema_version"]),
            "built_at": meta.get("built_at", ""),
            "generator": meta.get("generator", ""),
            "user_count": users,
            "entry_count": entries,
            "size_mb": os.path.getsize(self.path) / (1024 * 1024),
        }
