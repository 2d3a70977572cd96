"""SQLite archive of past readings."""

import json
import os
import sqlite3
import uuid
from datetime import datetime, timezone
from typing import List, Optional, Protocol

from ..models import ArchiveCreate, ArchiveEntry, Reading


class ReadingArchive(Protocol):
    def load(self) -> List[ArchiveEntry]: ...

    def append(self, entry: ArchiveCreate) -> ArchiveEntry: ...

    def get(self, entry_id: str) -> Optional[ArchiveEntry]: ...

    def delete(self, entry_id: str) -> bool: ...


class SqliteReadingArchive:
    """Append-only list of readings, newest first on load."""

    def __init__(self, db_path: str):
        self.db_path = db_path
        self.init_db()

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def init_db(self) -> None:
        """Create the archive table if needed."""
        directory = os.path.dirname(self.db_path)
        if directory:
            os.makedirs(directory, exist_ok=True)

        conn = self._connect()
        try:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS palm_archive (
                    seq INTEGER PRIMARY KEY AUTOINCREMENT,
                    id TEXT NOT NULL UNIQUE,
                    date TEXT NOT NULL,
                    reading_json TEXT NOT NULL,
                    image TEXT,
                    dominant_hand TEXT CHECK (dominant_hand IN ('left', 'right'))
                )
            """)
            conn.commit()
        finally:
            conn.close()

    @staticmethod
    def _row_to_entry(row: sqlite3.Row) -> ArchiveEntry:
        return ArchiveEntry(
            id=row["id"],
            date=row["date"],
            reading=Reading.model_validate(json.loads(row["reading_json"])),
            image=row["image"],
            dominantHand=row["dominant_hand"],
        )

    def load(self) -> List[ArchiveEntry]:
        conn = self._connect()
        try:
            cursor = conn.execute("""
                SELECT id, date, reading_json, image, dominant_hand
                FROM palm_archive ORDER BY seq DESC
            """)
            return [self._row_to_entry(row) for row in cursor.fetchall()]
        finally:
            conn.close()

    def append(self, entry: ArchiveCreate) -> ArchiveEntry:
        """Store a reading; raises ValueError if the id is already taken."""
        saved = ArchiveEntry(
            id=entry.id or str(uuid.uuid4()),
            date=datetime.now(timezone.utc).isoformat(),
            reading=entry.reading,
            image=entry.image,
            dominantHand=entry.dominantHand,
        )

        conn = self._connect()
        try:
            conn.execute(
                "INSERT INTO palm_archive (id, date, reading_json, image, dominant_hand) VALUES (?, ?, ?, ?, ?)",
                (saved.id, saved.date, saved.reading.model_dump_json(), saved.image, saved.dominantHand),
            )
            conn.commit()
        except sqlite3.IntegrityError as e:
            raise ValueError(f"Archive entry already exists: {saved.id}") from e
        finally:
            conn.close()

        return saved

    def get(self, entry_id: str) -> Optional[ArchiveEntry]:
        conn = self._connect()
        try:
            row = conn.execute(
                "SELECT id, date, reading_json, image, dominant_hand FROM palm_archive WHERE id = ?",
                (entry_id,),
            ).fetchone()
        finally:
            conn.close()
        return self._row_to_entry(row) if row else None

    def delete(self, entry_id: str) -> bool:
        conn = self._connect()
        try:
            cursor = conn.execute("DELETE FROM palm_archive WHERE id = ?", (entry_id,))
            conn.commit()
            return cursor.rowcount > 0
        finally:
            conn.close()
