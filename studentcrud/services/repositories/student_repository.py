from __future__ import annotations

from ...domain.models import Student
from ..live_query import LiveQuery
from .student_dao import StudentDao


class StudentRepository:
    """
    Single point of contact for the view layer.
    Hides the DAO behind stable names; no filtering, caching or retries, and
    write failures propagate unchanged.
    """

    def __init__(self, dao: StudentDao):
        self._dao = dao

    @property
    def all_students(self) -> LiveQuery:
        return self._dao.get_all()

    def observe_all(self) -> LiveQuery:
        return self.all_students

    def insert(self, name: str, course: str) -> Student:
        return self._dao.insert(name, course)

    def update(self, student_id: int, name: str, course: str) -> Student:
        return self._dao.update(student_id, name, course)

    def delete(self, student_id: int) -> None:
        self._dao.delete(student_id)
