"""
PLATE REPOSITORY - Access to the license-plate corpus
=====================================================

The search service only needs two reads:
- fetch_all(): the whole corpus
- fetch_containing(raw): records whose raw code, city or state contains
  `raw` (case-insensitive, no normalization)

Two adapters: an in-memory one (tests, small fixtures) and a SQLite one.
"""

import json
import logging
import sqlite3
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Protocol, Union

from models import PlateRecord

logger = logging.getLogger(__name__)


def _py_lower(value: Optional[str]) -> Optional[str]:
    return value.lower() if value is not None else None


class RepositoryError(Exception):
    """Failure reading or writing the plate corpus"""
    pass


class PlateRepository(Protocol):
    """Read interface consumed by PlateSearchService"""

    def fetch_all(self) -> List[PlateRecord]:
        ...

    def fetch_containing(self, raw_substring: str) -> List[PlateRecord]:
        ...


def load_plates_json(path: Union[str, Path]) -> List[Dict]:
    """
    Read a seed file: a JSON list of {code, city, region?, state} objects.
    """
    path = Path(path)
    try:
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise RepositoryError(f"Cannot read plate file {path}: {e}") from e

    if not isinstance(data, list):
        raise RepositoryError(f"{path}: expected a JSON list of plates")
    return data


# =============================================================================
# IN-MEMORY
# =============================================================================

class InMemoryPlateRepository:
    """Corpus held in a Python list"""

    def __init__(self, records: Iterable[PlateRecord]):
        self._records = list(records)

    def fetch_all(self) -> List[PlateRecord]:
        return list(self._records)

    def fetch_containing(self, raw_substring: str) -> List[PlateRecord]:
        needle = raw_substring.lower()
        return [
            r for r in self._records
            if needle in r.code.lower() or needle in r.city.lower() or needle in r.state.lower()
        ]


# =============================================================================
# SQLITE
# =============================================================================

class SqlitePlateRepository:
    """
    Corpus stored in a SQLite table `license_plates`.
    One short-lived connection per call.
    """

    def __init__(self, db_path: Union[str, Path]):
        self.db_path = str(db_path)

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        # SQLite LOWER() only folds ASCII; match str.lower() used everywhere else
        conn.create_function("PY_LOWER", 1, _py_lower, deterministic=True)
        return conn

    @staticmethod
    def _to_record(row: sqlite3.Row) -> PlateRecord:
        return PlateRecord(
            id=row["id"],
            code=row["code"],
            city=row["city"],
            region=row["region"],
            state=row["state"],
        )

    def _query(self, sql: str, params: tuple = ()) -> List[PlateRecord]:
        try:
            with self._connect() as conn:
                cur = conn.execute(sql, params)
                return [self._to_record(r) for r in cur.fetchall()]
        except sqlite3.Error as e:
            raise RepositoryError(f"Error querying {self.db_path}: {e}") from e

    def create_schema(self) -> None:
        try:
            with self._connect() as conn:
                conn.execute("""
                    CREATE TABLE IF NOT EXISTS license_plates (
                        id INTEGER PRIMARY KEY AUTOINCREMENT,
                        code TEXT NOT NULL UNIQUE,
                        city TEXT NOT NULL,
                        region TEXT,
                        state TEXT NOT NULL
                    )
                """)
        except sqlite3.Error as e:
            raise RepositoryError(f"Error creating schema in {self.db_path}: {e}") from e

    def replace_all(self, plates: Iterable[Dict]) -> int:
        """
        Seed the table: delete every row, then insert `plates`.

        Returns:
            Number of inserted rows
        """
        try:
            rows = [
                (p["code"], p["city"], p.get("region") or None, p["state"])
                for p in plates
            ]
        except KeyError as e:
            raise RepositoryError(f"Plate entry without field {e}") from e
        self.create_schema()
        try:
            with self._connect() as conn:
                conn.execute("DELETE FROM license_plates")
                conn.executemany(
                    "INSERT INTO license_plates (code, city, region, state) VALUES (?, ?, ?, ?)",
                    rows,
                )
        except sqlite3.Error as e:
            raise RepositoryError(f"Error inserting plates: {e}") from e

        logger.info(f"Seeded {len(rows)} license plates into {self.db_path}")
        return len(rows)

    def fetch_all(self) -> List[PlateRecord]:
        return self._query("""
            SELECT id, code, city, region, state
            FROM license_plates
            ORDER BY code ASC
        """)

    def fetch_containing(self, raw_substring: str) -> List[PlateRecord]:
        escaped = (
            raw_substring.lower()
            .replace("\\", "\\\\")
            .replace("%", "\\%")
            .replace("_", "\\_")
        )
        pattern = f"%{escaped}%"
        return self._query("""
            SELECT id, code, city, region, state
            FROM license_plates
            WHERE PY_LOWER(code) LIKE ? ESCAPE '\\'
               OR PY_LOWER(city) LIKE ? ESCAPE '\\'
               OR PY_LOWER(state) LIKE ? ESCAPE '\\'
            ORDER BY code ASC
        """, (pattern, pattern, pattern))

    def get_by_id(self, plate_id: Union[int, str]) -> Optional[PlateRecord]:
        rows = self._query(
            "SELECT id, code, city, region, state FROM license_plates WHERE id = ?",
            (plate_id,),
        )
        return rows[0] if rows else None

    def get_by_code(self, code: str) -> Optional[PlateRecord]:
        rows = self._query(
            "SELECT id, code, city, region, state FROM license_plates WHERE code = ?",
            (code,),
        )
        return rows[0] if rows else None
