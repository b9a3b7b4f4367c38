from __future__ import annotations
import os
import logging
import sqlite3
import threading
from typing import Optional

from .. import config
from ..domain.models import Snapshot, Student
from ..errors import NotFoundError, StorageError
from .live_query import LiveQuery

logger = logging.getLogger(__name__)


class StudentStore:
    """
    SQLite-backed table of students and the single source of truth for reads.

    One connection is shared by every caller and guarded by a re-entrant lock,
    so writes from any thread are serialized. After each successful write the
    full table is published to all live queries.
    """

    def __init__(self, db_path: Optional[str] = None, table: str = config.STUDENT_TABLE):
        self._db_path = db_path or config.STUDENT_DB_PATH
        self._table = table
        self._lock = threading.RLock()
        self._conn: Optional[sqlite3.Connection] = None
        self._connect()
        self._live = LiveQuery(self.snapshot, lock=self._lock)

    @property
    def db_path(self) -> str:
        return self._db_path

    def _connect(self) -> None:
        if self._db_path != ":memory:":
            folder = os.path.dirname(os.path.abspath(self._db_path))
            try:
                os.makedirs(folder, exist_ok=True)
            except OSError as exc:
                raise StorageError(f"Cannot create database folder {folder}: {exc}") from exc
        try:
            # Shared across the UI thread and write workers; access goes through self._lock
            conn = sqlite3.connect(self._db_path, check_same_thread=False)
            conn.row_factory = sqlite3.Row
            conn.execute(
                f"""
                CREATE TABLE IF NOT EXISTS {self._table} (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    name TEXT NOT NULL,
                    course TEXT NOT NULL
                )
                """
            )
            conn.commit()
        except sqlite3.Error as exc:
            raise StorageError(f"Cannot open student database {self._db_path}: {exc}") from exc
        self._conn = conn
        logger.info(f"Opened student database {self._db_path}")

    def _require_conn(self) -> sqlite3.Connection:
        if self._conn is None:
            raise StorageError("Student database is closed")
        return self._conn

    # --- Reads ---

    def query_all(self) -> LiveQuery:
        """Live channel of the full table, ordered by id (insertion order)."""
        return self._live

    def snapshot(self) -> Snapshot:
        with self._lock:
            conn = self._require_conn()
            try:
                rows = conn.execute(f"SELECT id, name, course FROM {self._table} ORDER BY id").fetchall()
            except sqlite3.Error as exc:
                raise StorageError(f"Failed to read students: {exc}") from exc
        return tuple(_row_to_student(r) for r in rows)

    def get(self, student_id: int) -> Student:
        with self._lock:
            conn = self._require_conn()
            try:
                row = conn.execute(
                    f"SELECT id, name, course FROM {self._table} WHERE id = ?",
                    (int(student_id),),
                ).fetchone()
            except sqlite3.Error as exc:
                raise StorageError(f"Failed to read student {student_id}: {exc}") from exc
        if row is None:
            raise NotFoundError(student_id)
        return _row_to_student(row)

    # --- Writes ---

    def insert(self, name: str, course: str) -> Student:
        with self._lock:
            cur = self._write(
                f"INSERT INTO {self._table} (name, course) VALUES (?, ?)",
                (str(name), str(course)),
            )
            student = Student(id=int(cur.lastrowid), name=str(name), course=str(course))
            logger.debug(f"Inserted student {student.id}")
            self._live.publish()
        return student

    def update(self, student_id: int, name: str, course: str) -> Student:
        with self._lock:
            cur = self._write(
                f"UPDATE {self._table} SET name = ?, course = ? WHERE id = ?",
                (str(name), str(course), int(student_id)),
            )
            if cur.rowcount == 0:
                raise NotFoundError(student_id)
            student = Student(id=int(student_id), name=str(name), course=str(course))
            logger.debug(f"Updated student {student.id}")
            self._live.publish()
        return student

    def delete(self, student_id: int) -> None:
        with self._lock:
            cur = self._write(f"DELETE FROM {self._table} WHERE id = ?", (int(student_id),))
            if cur.rowcount == 0:
                raise NotFoundError(student_id)
            logger.debug(f"Deleted student {student_id}")
            self._live.publish()

    def _write(self, sql: str, params: tuple) -> sqlite3.Cursor:
        conn = self._require_conn()
        try:
            cur = conn.execute(sql, params)
            conn.commit()
        except sqlite3.Error as exc:
            try:
                conn.rollback()
            except sqlite3.Error as rollback_exc:
                logger.error(f"Rollback after failed student write also failed: {rollback_exc}")
            logger.error(f"Student write failed: {exc}")
            raise StorageError(f"Student write failed: {exc}") from exc
        return cur

    def close(self) -> None:
        with self._lock:
            if self._conn is None:
                return
            self._conn.close()
            self._conn = None
            logger.info(f"Closed student database {self._db_path}")


def _row_to_student(row: sqlite3.Row) -> Student:
    return Student(id=int(row["id"]), name=str(row["name"]), course=str(row["course"]))
