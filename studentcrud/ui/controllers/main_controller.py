from __future__ import annotations
import logging
from typing import Optional

from PySide6 import QtCore

from ... import config
from ...services.student_store import StudentStore
from ...services.repositories.student_dao import StudentDao
from ...services.repositories.student_repository import StudentRepository
from .student_controller import StudentController

logger = logging.getLogger(__name__)


class MainController(QtCore.QObject):
    """
    Main controller for the application.
    Owns the one student store for the process and wires store -> DAO ->
    repository -> view controller.
    """
    def __init__(self, db_path: Optional[str] = None):
        super().__init__()
        self.store = StudentStore(db_path or config.STUDENT_DB_PATH)
        self.repository = StudentRepository(StudentDao(self.store))
        self.students = StudentController(self.repository, parent=self)

    def shutdown(self):
        """Stop observing, let in-flight writes finish, close the database."""
        self.students.dispose()
        if not self.students.wait_for_pending(config.SHUTDOWN_WAIT_MS):
            logger.warning("Shutdown timed out waiting for pending student writes")
        self.store.close()
