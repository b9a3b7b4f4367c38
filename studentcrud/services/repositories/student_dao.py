from __future__ import annotations

from ...domain.models import Student
from ..live_query import LiveQuery
from ..student_store import StudentStore


class StudentDao:
    """
    Narrow, typed query surface over the student table.
    Only the repository uses this; it carries no logic of its own.
    """

    def __init__(self, store: StudentStore):
        self._store = store

    def get_all(self) -> LiveQuery:
        """Live channel: redelivers the full table after every write."""
        return self._store.query_all()

    def insert(self, name: str, course: str) -> Student:
        return self._store.insert(name, course)

    def update(self, student_id: int, name: str, course: str) -> Student:
        return self._store.update(student_id, name, course)

    def delete(self, student_id: int) -> None:
        self._store.delete(student_id)
