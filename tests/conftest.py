from __future__ import annotations

import pytest
from PySide6 import QtCore

from studentcrud.services.student_store import StudentStore
from studentcrud.services.repositories.student_dao import StudentDao
from studentcrud.services.repositories.student_repository import StudentRepository


@pytest.fixture(scope="session")
def qt_app():
    app = QtCore.QCoreApplication.instance() or QtCore.QCoreApplication([])
    yield app


@pytest.fixture
def store():
    s = StudentStore(":memory:")
    yield s
    s.close()


@pytest.fixture
def repository(store: StudentStore) -> StudentRepository:
    return StudentRepository(StudentDao(store))


class Recorder:
    """Collects snapshots (as plain lists) delivered to a subscriber."""

    def __init__(self):
        self.snapshots = []
        self.errors = []

    def on_next(self, snapshot) -> None:
        self.snapshots.append(list(snapshot))

    def on_error(self, exc) -> None:
        self.errors.append(exc)

    @property
    def last(self):
        return self.snapshots[-1]


@pytest.fixture
def recorder() -> Recorder:
    return Recorder()


@pytest.fixture
def make_recorder():
    return Recorder
