"""
sqlite_store.py
SQLite-backed narrator registry.

Tables follow the narrator database layout:
    narrators, narrator_names, scholarly_opinions,
    narrator_relationships, narrator_lineage

The whole registry is read once per invocation (load_registry); the core
then scans it in memory. Biography detail is fetched per id.
"""

from __future__ import annotations

import sqlite3
from pathlib import Path
from typing import Dict, List, Optional, Union

from isnad_resolver.core.exceptions import NarratorLookupError, RegistryError
from isnad_resolver.logging import get_logger
from isnad_resolver.registry.entities import (
    AlternateName,
    NarratorDetail,
    NarratorLineage,
    NarratorRecord,
    NarratorRegistry,
    NarratorRelationship,
    ScholarlyOpinion,
)

log = get_logger("sqlite_store")

SCHEMA = """
CREATE TABLE IF NOT EXISTS narrators (
    id TEXT PRIMARY KEY,
    primary_arabic_name TEXT NOT NULL,
    primary_english_name TEXT NOT NULL,
    full_name_arabic TEXT,
    full_name_english TEXT,
    title TEXT,
    kunya TEXT,
    lineage TEXT,
    death_year_ah INTEGER,
    death_year_ah_alternative INTEGER,
    death_year_ce INTEGER,
    place_of_residence TEXT,
    place_of_death TEXT,
    places_traveled TEXT,
    taqrib_category TEXT,
    ibn_hajar_rank TEXT,
    dhahabi_rank TEXT,
    notes TEXT,
    search_text TEXT
);

CREATE TABLE IF NOT EXISTS narrator_names (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    narrator_id TEXT NOT NULL REFERENCES narrators(id),
    arabic_name TEXT NOT NULL,
    english_name TEXT,
    name_type TEXT DEFAULT 'alternate',
    is_primary INTEGER DEFAULT 0
);

CREATE TABLE IF NOT EXISTS scholarly_opinions (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    narrator_id TEXT NOT NULL REFERENCES narrators(id),
    scholar_name TEXT NOT NULL,
    opinion_text TEXT NOT NULL,
    source_reference TEXT,
    source_book TEXT,
    source_volume TEXT,
    opinion_type TEXT DEFAULT 'neutral',
    is_primary INTEGER DEFAULT 0
);

CREATE TABLE IF NOT EXISTS narrator_relationships (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    narrator_id TEXT NOT NULL REFERENCES narrators(id),
    related_narrator_id TEXT NOT NULL,
    relationship_type TEXT NOT NULL,
    relationship_description TEXT,
    duration_years INTEGER
);

CREATE TABLE IF NOT EXISTS narrator_lineage (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    narrator_id TEXT NOT NULL REFERENCES narrators(id),
    lineage_type TEXT NOT NULL,
    lineage_value TEXT NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_narrator_names_narrator ON narrator_names(narrator_id);
"""

_RECORD_COLUMNS = (
    "id",
    "primary_arabic_name",
    "primary_english_name",
    "full_name_arabic",
    "full_name_english",
    "title",
    "kunya",
    "lineage",
    "search_text",
    "taqrib_category",
    "ibn_hajar_rank",
    "dhahabi_rank",
    "place_of_residence",
    "death_year_ah",
    "death_year_ah_alternative",
    "death_year_ce",
    "place_of_death",
    "notes",
)


def _record_from_row(row: sqlite3.Row, alternates: List[AlternateName]) -> NarratorRecord:
    data = {col: row[col] for col in _RECORD_COLUMNS}
    data["primary_arabic_name"] = data["primary_arabic_name"] or ""
    data["primary_english_name"] = data["primary_english_name"] or ""
    return NarratorRecord(alternate_names=alternates, **data)


class SqliteNarratorStore:
    """
    Usage:
        with SqliteNarratorStore("data/narrators.db") as store:
            registry = store.load_registry()
    """

    def __init__(self, db_path: Union[str, Path], create: bool = False):
        self.db_path = Path(db_path)
        self.create = create
        self._conn: Optional[sqlite3.Connection] = None

    # -----------------------------------------------------------------
    # Connection handling
    # -----------------------------------------------------------------

    def open(self) -> "SqliteNarratorStore":
        if self._conn is None:
            if not self.create and not self.db_path.exists():
                raise RegistryError(f"Narrator database not found: {self.db_path}")
            try:
                self._conn = sqlite3.connect(str(self.db_path))
            except sqlite3.Error as exc:
                raise RegistryError(f"Cannot open narrator database {self.db_path}: {exc}") from exc
            self._conn.row_factory = sqlite3.Row
            self._conn.execute("PRAGMA foreign_keys = ON")
        return self

    def close(self) -> None:
        if self._conn is not None:
            self._conn.close()
            self._conn = None

    def __enter__(self) -> "SqliteNarratorStore":
        return self.open()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    @property
    def conn(self) -> sqlite3.Connection:
        if self._conn is None:
            self.open()
        assert self._conn is not None
        return self._conn

    def _query(self, sql: str, params: tuple = ()) -> List[sqlite3.Row]:
        try:
            return self.conn.execute(sql, params).fetchall()
        except sqlite3.Error as exc:
            raise RegistryError(f"Narrator database query failed: {exc}") from exc

    # -----------------------------------------------------------------
    # Schema / writes
    # -----------------------------------------------------------------

    def initialize_schema(self) -> None:
        try:
            self.conn.executescript(SCHEMA)
        except sqlite3.Error as exc:
            raise RegistryError(f"Cannot initialize narrator schema: {exc}") from exc

    def add_narrator(self, record: NarratorRecord) -> None:
        columns = ", ".join(_RECORD_COLUMNS)
        placeholders = ", ".join("?" for _ in _RECORD_COLUMNS)
        updates = ", ".join(f"{col} = excluded.{col}" for col in _RECORD_COLUMNS if col != "id")
        values = tuple(getattr(record, col) for col in _RECORD_COLUMNS)
        try:
            with self.conn:
                self.conn.execute("DELETE FROM narrator_names WHERE narrator_id = ?", (record.id,))
                self.conn.execute(
                    f"INSERT INTO narrators ({columns}) VALUES ({placeholders}) "
                    f"ON CONFLICT(id) DO UPDATE SET {updates}",
                    values,
                )
                self.conn.executemany(
                    "INSERT INTO narrator_names (narrator_id, arabic_name, english_name, name_type, is_primary) "
                    "VALUES (?, ?, ?, ?, ?)",
                    [
                        (record.id, alt.arabic_name, alt.english_name, alt.name_type, int(alt.is_primary))
                        for alt in record.alternate_names
                    ],
                )
        except sqlite3.Error as exc:
            raise RegistryError(f"Cannot store narrator {record.id}: {exc}") from exc

    # -----------------------------------------------------------------
    # Reads
    # -----------------------------------------------------------------

    def _alternate_map(self) -> Dict[str, List[AlternateName]]:
        alternates: Dict[str, List[AlternateName]] = {}
        rows = self._query(
            "SELECT narrator_id, arabic_name, english_name, name_type, is_primary FROM narrator_names ORDER BY id"
        )
        for row in rows:
            alternates.setdefault(row["narrator_id"], []).append(AlternateName(
                arabic_name=row["arabic_name"] or "",
                english_name=row["english_name"],
                name_type=row["name_type"] or "alternate",
                is_primary=bool(row["is_primary"]),
            ))
        return alternates

    def load_registry(self) -> NarratorRegistry:
        alternates = self._alternate_map()
        rows = self._query(f"SELECT {', '.join(_RECORD_COLUMNS)} FROM narrators")

        registry = NarratorRegistry()
        for row in rows:
            registry.register(_record_from_row(row, alternates.get(row["id"], [])))

        log.info("Loaded %d narrators from %s", len(registry), self.db_path)
        return registry

    def get_narrator(self, narrator_id: str) -> NarratorRecord:
        rows = self._query(
            f"SELECT {', '.join(_RECORD_COLUMNS)} FROM narrators WHERE id = ?",
            (narrator_id,),
        )
        if not rows:
            raise NarratorLookupError(narrator_id)
        alt_rows = self._query(
            "SELECT arabic_name, english_name, name_type, is_primary FROM narrator_names "
            "WHERE narrator_id = ? ORDER BY id",
            (narrator_id,),
        )
        alternates = [
            AlternateName(
                arabic_name=r["arabic_name"] or "",
                english_name=r["english_name"],
                name_type=r["name_type"] or "alternate",
                is_primary=bool(r["is_primary"]),
            )
            for r in alt_rows
        ]
        return _record_from_row(rows[0], alternates)

    def get_narrator_detail(self, narrator_id: str) -> NarratorDetail:
        """
        Record + opinions + relationships + lineages.

        Raises NarratorLookupError for unknown ids and RegistryError for
        database failures.
        """
        record = self.get_narrator(narrator_id)

        opinions = [
            ScholarlyOpinion(
                scholar_name=r["scholar_name"],
                opinion_text=r["opinion_text"],
                opinion_type=r["opinion_type"] or "neutral",
                source_reference=r["source_reference"],
                source_book=r["source_book"],
                source_volume=r["source_volume"],
                is_primary=bool(r["is_primary"]),
            )
            for r in self._query(
                "SELECT * FROM scholarly_opinions WHERE narrator_id = ? ORDER BY id", (narrator_id,)
            )
        ]
        relationships = [
            NarratorRelationship(
                related_narrator_id=r["related_narrator_id"],
                relationship_type=r["relationship_type"],
                relationship_description=r["relationship_description"],
                duration_years=r["duration_years"],
            )
            for r in self._query(
                "SELECT * FROM narrator_relationships WHERE narrator_id = ? ORDER BY id", (narrator_id,)
            )
        ]
        lineages = [
            NarratorLineage(lineage_type=r["lineage_type"], lineage_value=r["lineage_value"])
            for r in self._query(
                "SELECT * FROM narrator_lineage WHERE narrator_id = ? ORDER BY id", (narrator_id,)
            )
        ]

        return NarratorDetail(
            record=record,
            scholarly_opinions=opinions,
            relationships=relationships,
            lineages=lineages,
        )
