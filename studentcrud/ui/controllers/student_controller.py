from __future__ import annotations
import enum
import logging
import threading
from typing import Callable, List, Optional

from PySide6 import QtCore

from ... import config
from ...domain.models import Snapshot, Student
from ...errors import ControllerDisposedError
from ...services.live_query import Subscription
from ...services.repositories.student_repository import StudentRepository

logger = logging.getLogger(__name__)


class ControllerState(enum.Enum):
    UNINITIALIZED = "uninitialized"
    SUBSCRIBED = "subscribed"
    FAILED = "failed"  # read channel ended with an error; writes still dispatch
    DISPOSED = "disposed"


class _WriteTask(QtCore.QRunnable):
    """One write intent, run on the controller's thread pool."""

    def __init__(self, intent: str, fn: Callable[[], object], on_error: Callable[[str, str], None]):
        super().__init__()
        self.intent = intent
        self._fn = fn
        self._on_error = on_error

    def run(self) -> None:
        try:
            self._fn()
        except Exception as exc:
            logger.error(f"{self.intent} failed: {exc}")
            self._on_error(self.intent, str(exc))


class StudentController(QtCore.QObject):
    """
    View-state controller for the student list.

    Subscribes to the repository's live channel on construction and keeps the
    latest snapshot as its state. Write intents are fire-and-forget: they are
    queued on a thread pool and their outcome only shows up as the next
    snapshot. Failures never reach the caller; they are logged and announced
    on `write_failed`.
    """
    # Signals for View
    students_changed = QtCore.Signal(list)  # list[Student], full snapshot
    write_failed = QtCore.Signal(str, str)  # intent, message
    channel_failed = QtCore.Signal(str)  # message; no further snapshots

    def __init__(
        self,
        repository: StudentRepository,
        thread_pool: Optional[QtCore.QThreadPool] = None,
        parent: Optional[QtCore.QObject] = None,
    ):
        super().__init__(parent)
        self._repository = repository
        if thread_pool is None:
            thread_pool = QtCore.QThreadPool()
            thread_pool.setMaxThreadCount(config.WRITE_WORKERS)
        self._pool = thread_pool
        self._lock = threading.Lock()
        self._students: List[Student] = []
        self._state = ControllerState.UNINITIALIZED
        self._subscription: Optional[Subscription] = None
        self._channel_error: Optional[str] = None

        sub = self._repository.all_students.subscribe(self._on_snapshot, self._on_channel_error)
        with self._lock:
            if self._state is ControllerState.UNINITIALIZED:
                self._state = ControllerState.SUBSCRIBED
                self._subscription = sub
        if self._channel_error is not None:
            # Failed while subscribing: nothing can be connected yet, announce on the next loop turn
            QtCore.QTimer.singleShot(0, self._announce_channel_error)
        else:
            logger.debug("Student controller subscribed")

    @property
    def state(self) -> ControllerState:
        return self._state

    @property
    def channel_error(self) -> Optional[str]:
        """Message of the terminal read-channel failure, if any."""
        return self._channel_error

    @property
    def students(self) -> List[Student]:
        with self._lock:
            return list(self._students)

    # --- Write intents ---

    def add_student(self, name: str, course: str) -> None:
        self._dispatch("add_student", lambda: self._repository.insert(name, course))

    def update_student(self, student_id: int, name: str, course: str) -> None:
        self._dispatch("update_student", lambda: self._repository.update(student_id, name, course))

    def delete_student(self, student_id: int) -> None:
        self._dispatch("delete_student", lambda: self._repository.delete(student_id))

    def _dispatch(self, intent: str, fn: Callable[[], object]) -> None:
        if self._state is ControllerState.DISPOSED:
            raise ControllerDisposedError(f"{intent} issued after dispose()")
        self._pool.start(_WriteTask(intent, fn, self.write_failed.emit))

    def wait_for_pending(self, timeout_ms: int = -1) -> bool:
        """Block until dispatched writes have finished. Returns False on timeout."""
        return bool(self._pool.waitForDone(timeout_ms))

    # --- Lifecycle ---

    def dispose(self) -> None:
        """Cancel the subscription. Writes already dispatched still run."""
        with self._lock:
            if self._state is ControllerState.DISPOSED:
                return
            self._state = ControllerState.DISPOSED
            sub, self._subscription = self._subscription, None
        if sub is not None:
            sub.cancel()
        logger.debug("Student controller disposed")

    # --- Channel callbacks (run on whichever thread performed the write) ---

    def _on_snapshot(self, snapshot: Snapshot) -> None:
        with self._lock:
            if self._state is ControllerState.DISPOSED:
                return
            self._students = list(snapshot)
            students = list(self._students)
        self.students_changed.emit(students)

    def _on_channel_error(self, exc: BaseException) -> None:
        logger.error(f"Student list channel failed: {exc}")
        with self._lock:
            if self._state is ControllerState.DISPOSED:
                return
            constructing = self._state is ControllerState.UNINITIALIZED
            self._state = ControllerState.FAILED
            self._subscription = None
            self._channel_error = str(exc)
        if not constructing:
            self.channel_failed.emit(self._channel_error)

    def _announce_channel_error(self) -> None:
        if self._state is ControllerState.FAILED and self._channel_error is not None:
            self.channel_failed.emit(self._channel_error)
