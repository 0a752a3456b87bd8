"""SQLite storage for family members, their health labels and user preferences."""

from contextlib import contextmanager
from datetime import date
import logging
from pathlib import Path
import sqlite3
from typing import Callable, Iterator

from heritage_health.errors import NotFoundError
from heritage_health.models import HealthStatus, PersonRecord, normalize_labels

logger = logging.getLogger(__name__)

# kind of change ("insert", "update", "delete") and the affected person ID
Subscriber = Callable[[str, int], None]


def create_database(db_path: Path | str) -> sqlite3.Connection:
    """Create SQLite database with person, label and preference tables."""
    conn = sqlite3.connect(str(db_path))
    conn.execute("PRAGMA foreign_keys = ON")
    cursor = conn.cursor()

    cursor.execute("""
        CREATE TABLE IF NOT EXISTS person (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            name TEXT NOT NULL,
            age INTEGER NOT NULL DEFAULT 0,
            birth_date TEXT,
            deceased INTEGER NOT NULL DEFAULT 0,
            last_checkup TEXT,
            notes TEXT NOT NULL DEFAULT '',
            health_status TEXT NOT NULL DEFAULT 'healthy',
            generation INTEGER NOT NULL DEFAULT 0,
            level INTEGER NOT NULL DEFAULT 0,
            parent_id INTEGER,
            FOREIGN KEY (parent_id) REFERENCES person(id)
        )
    """)

    cursor.execute("""
        CREATE TABLE IF NOT EXISTS person_label (
            person_id INTEGER NOT NULL,
            kind TEXT NOT NULL,
            label TEXT NOT NULL,
            PRIMARY KEY (person_id, kind, label),
            FOREIGN KEY (person_id) REFERENCES person(id) ON DELETE CASCADE
        )
    """)

    cursor.execute("""
        CREATE TABLE IF NOT EXISTS preference (
            key TEXT PRIMARY KEY,
            value TEXT NOT NULL
        )
    """)

    conn.commit()
    return conn


def _iso(value: date | None) -> str | None:
    return value.isoformat() if value else None


def _from_iso(value: str | None) -> date | None:
    return date.fromisoformat(value) if value else None


class FamilyStore:
    """Transactional store for `PersonRecord`s.

    Every write runs in its own transaction and either fully applies or leaves
    the database untouched. Subscribers are called after a write commits.
    """

    def __init__(self, db_path: Path | str = ":memory:"):
        self.db_path = db_path
        self.conn = create_database(db_path)
        self._subscribers: list[Subscriber] = []

    # ------------------------------------------------------------------
    # Observers
    # ------------------------------------------------------------------

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register `callback(kind, person_id)`; returns a function that unsubscribes it."""
        self._subscribers.append(callback)

        def unsubscribe():
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def _notify(self, kind: str, person_id: int):
        for callback in list(self._subscribers):
            callback(kind, person_id)

    # ------------------------------------------------------------------
    # Transactions
    # ------------------------------------------------------------------

    @contextmanager
    def transaction(self) -> Iterator[sqlite3.Cursor]:
        """Yield a cursor; commit on success, roll back on any exception."""
        with self.conn:
            yield self.conn.cursor()

    def save(self):
        self.conn.commit()

    def close(self):
        self.conn.close()

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def _labels_by_person(self, person_id: int | None = None) -> dict[int, dict[str, list[str]]]:
        cursor = self.conn.cursor()
        if person_id is None:
            cursor.execute("SELECT person_id, kind, label FROM person_label")
        else:
            cursor.execute(
                "SELECT person_id, kind, label FROM person_label WHERE person_id = ?",
                (person_id,),
            )
        labels: dict[int, dict[str, list[str]]] = {}
        for pid, kind, label in cursor.fetchall():
            labels.setdefault(pid, {}).setdefault(kind, []).append(label)
        return labels

    @staticmethod
    def _row_to_record(row: tuple, labels: dict[str, list[str]]) -> PersonRecord:
        return PersonRecord(
            id=row[0],
            name=row[1],
            age=row[2],
            birth_date=_from_iso(row[3]),
            deceased=bool(row[4]),
            last_checkup=_from_iso(row[5]),
            notes=row[6],
            health_status=HealthStatus(row[7]),
            generation=row[8],
            level=row[9],
            parent_id=row[10],
            conditions=normalize_labels(labels.get("condition")),
            medications=normalize_labels(labels.get("medication")),
            allergies=normalize_labels(labels.get("allergy")),
        )

    _SELECT = """
        SELECT id, name, age, birth_date, deceased, last_checkup, notes,
               health_status, generation, level, parent_id
        FROM person
    """

    def get(self, person_id: int) -> PersonRecord:
        """Fetch one person; raises NotFoundError if the ID is unknown."""
        cursor = self.conn.cursor()
        cursor.execute(self._SELECT + " WHERE id = ?", (person_id,))
        row = cursor.fetchone()
        if row is None:
            raise NotFoundError(person_id)
        return self._row_to_record(row, self._labels_by_person(person_id).get(person_id, {}))

    def exists(self, person_id: int) -> bool:
        cursor = self.conn.cursor()
        cursor.execute("SELECT 1 FROM person WHERE id = ?", (person_id,))
        return cursor.fetchone() is not None

    def query_all(self) -> list[PersonRecord]:
        """Return every stored person in creation order."""
        cursor = self.conn.cursor()
        cursor.execute(self._SELECT + " ORDER BY id")
        labels = self._labels_by_person()
        return [self._row_to_record(row, labels.get(row[0], {})) for row in cursor.fetchall()]

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    @staticmethod
    def _person_values(record: PersonRecord) -> tuple:
        return (
            record.name,
            record.age,
            _iso(record.birth_date),
            int(record.deceased),
            _iso(record.last_checkup),
            record.notes,
            HealthStatus(record.health_status).value,
            record.generation,
            record.level,
            record.parent_id,
        )

    @staticmethod
    def _write_labels(cursor: sqlite3.Cursor, person_id: int, record: PersonRecord):
        cursor.execute("DELETE FROM person_label WHERE person_id = ?", (person_id,))
        rows = []
        for kind, values in (
            ("condition", record.conditions),
            ("medication", record.medications),
            ("allergy", record.allergies),
        ):
            rows.extend((person_id, kind, label) for label in normalize_labels(values))
        cursor.executemany(
            "INSERT INTO person_label (person_id, kind, label) VALUES (?, ?, ?)", rows
        )

    def insert(self, record: PersonRecord) -> PersonRecord:
        """Insert a new person and assign its ID (the passed record is updated in place)."""
        with self.transaction() as cursor:
            cursor.execute(
                """
                INSERT INTO person
                (name, age, birth_date, deceased, last_checkup, notes,
                 health_status, generation, level, parent_id)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                self._person_values(record),
            )
            new_id = cursor.lastrowid
            self._write_labels(cursor, new_id, record)
        record.id = new_id
        logger.debug("Inserted person %s (%s)", record.id, record.name)
        self._notify("insert", record.id)
        return record

    def update(self, record: PersonRecord) -> PersonRecord:
        """Overwrite every column of an existing person."""
        with self.transaction() as cursor:
            cursor.execute(
                """
                UPDATE person SET
                    name = ?, age = ?, birth_date = ?, deceased = ?, last_checkup = ?,
                    notes = ?, health_status = ?, generation = ?, level = ?, parent_id = ?
                WHERE id = ?
                """,
                self._person_values(record) + (record.id,),
            )
            if cursor.rowcount == 0:
                raise NotFoundError(record.id)
            self._write_labels(cursor, record.id, record)
        logger.debug("Updated person %s", record.id)
        self._notify("update", record.id)
        return record

    def delete(self, person_id: int) -> list[int]:
        """Delete a person, detaching its children first.

        Children become roots; they are not re-attached to the deleted person's
        parent. Returns the IDs of the detached children.
        """
        with self.transaction() as cursor:
            cursor.execute("SELECT id FROM person WHERE parent_id = ? ORDER BY id", (person_id,))
            orphan_ids = [row[0] for row in cursor.fetchall()]
            cursor.execute("UPDATE person SET parent_id = NULL WHERE parent_id = ?", (person_id,))
            cursor.execute("DELETE FROM person_label WHERE person_id = ?", (person_id,))
            cursor.execute("DELETE FROM person WHERE id = ?", (person_id,))
            if cursor.rowcount == 0:
                raise NotFoundError(person_id)
        logger.debug("Deleted person %s, detached %d children", person_id, len(orphan_ids))
        self._notify("delete", person_id)
        return orphan_ids

    # ------------------------------------------------------------------
    # Preferences
    # ------------------------------------------------------------------

    def get_preferences(self) -> dict[str, str]:
        cursor = self.conn.cursor()
        cursor.execute("SELECT key, value FROM preference")
        return dict(cursor.fetchall())

    def set_preferences(self, values: dict[str, str]):
        with self.transaction() as cursor:
            cursor.executemany(
                "INSERT OR REPLACE INTO preference (key, value) VALUES (?, ?)",
                list(values.items()),
            )
