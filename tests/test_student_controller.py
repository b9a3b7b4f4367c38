from __future__ import annotations

import time

import pytest
from PySide6 import QtCore

from studentcrud.domain.models import Student
from studentcrud.errors import ControllerDisposedError
from studentcrud.ui.controllers.student_controller import ControllerState, StudentController


def _pump_until(app, predicate, timeout_s: float = 5.0) -> bool:
    deadline = time.monotonic() + timeout_s
    while time.monotonic() < deadline:
        app.processEvents()
        if predicate():
            return True
        time.sleep(0.01)
    return predicate()


@pytest.fixture
def controller(qt_app, repository):
    ctrl = StudentController(repository)
    yield ctrl
    ctrl.dispose()
    ctrl.wait_for_pending(5000)


def test_subscribes_on_construction(qt_app, store, repository):
    store.insert("Ada", "CS")

    ctrl = StudentController(repository)
    try:
        assert ctrl.state is ControllerState.SUBSCRIBED
        assert ctrl.students == [Student(1, "Ada", "CS")]
        assert store.query_all().subscriber_count == 1
    finally:
        ctrl.dispose()


def test_add_is_fire_and_forget(controller):
    assert controller.add_student("Ada", "CS") is None
    assert controller.wait_for_pending(5000)

    assert controller.students == [Student(1, "Ada", "CS")]


def test_update_and_delete_show_up_in_state(controller):
    controller.add_student("Ada", "CS")
    controller.add_student("Grace", "Math")
    controller.update_student(1, "Ada L.", "CS")
    assert controller.wait_for_pending(5000)
    assert controller.students == [Student(1, "Ada L.", "CS"), Student(2, "Grace", "Math")]

    controller.delete_student(1)
    assert controller.wait_for_pending(5000)
    assert controller.students == [Student(2, "Grace", "Math")]


def test_state_tracks_writes_from_other_callers(controller, store):
    store.insert("Ada", "CS")
    assert controller.students == [Student(1, "Ada", "CS")]


def test_students_changed_carries_full_snapshot(qt_app, controller):
    received = []
    controller.students_changed.connect(received.append)

    controller.add_student("Ada", "CS")
    controller.wait_for_pending(5000)

    assert _pump_until(qt_app, lambda: len(received) >= 1)
    assert received[-1] == [Student(1, "Ada", "CS")]


def test_failed_write_is_not_raised_and_is_announced(qt_app, controller):
    failures = []
    controller.write_failed.connect(lambda intent, msg: failures.append((intent, msg)))

    controller.delete_student(99)
    assert controller.wait_for_pending(5000)

    assert _pump_until(qt_app, lambda: len(failures) == 1)
    assert failures[0][0] == "delete_student"
    assert "99" in failures[0][1]
    assert controller.students == []


def test_dispose_cancels_subscription(controller, store):
    controller.dispose()
    controller.dispose()

    store.insert("Ada", "CS")

    assert controller.state is ControllerState.DISPOSED
    assert controller.students == []
    assert store.query_all().subscriber_count == 0


def test_intents_after_dispose_are_rejected(controller):
    controller.dispose()
    with pytest.raises(ControllerDisposedError):
        controller.add_student("Ada", "CS")
    with pytest.raises(ControllerDisposedError):
        controller.update_student(1, "Ada", "CS")
    with pytest.raises(ControllerDisposedError):
        controller.delete_student(1)


def test_dispatched_writes_still_run_after_dispose(controller, store):
    controller.add_student("Ada", "CS")
    controller.dispose()

    assert controller.wait_for_pending(5000)
    assert store.snapshot() == (Student(1, "Ada", "CS"),)


def test_channel_failure_is_announced(qt_app, controller, store):
    failures = []
    controller.channel_failed.connect(failures.append)

    store.close()
    store.query_all().publish()

    assert _pump_until(qt_app, lambda: len(failures) == 1)
    assert store.query_all().subscriber_count == 0
    assert controller.state is ControllerState.FAILED
    assert controller.channel_error == failures[0]


def test_shared_pool_serializes_intents(qt_app, repository):
    pool = QtCore.QThreadPool()
    pool.setMaxThreadCount(1)
    ctrl = StudentController(repository, thread_pool=pool)
    try:
        for i in range(10):
            ctrl.add_student(f"s{i}", "CS")
        assert ctrl.wait_for_pending(5000)
        assert [s.name for s in ctrl.students] == [f"s{i}" for i in range(10)]
        assert [s.id for s in ctrl.students] == list(range(1, 11))
    finally:
        ctrl.dispose()


def test_state_goes_subscribed_only_after_first_snapshot(qt_app, repository):
    seen_states = []

    class _Watching(StudentController):
        def _on_snapshot(self, snapshot):
            seen_states.append(self.state)
            super()._on_snapshot(snapshot)

    ctrl = _Watching(repository)
    try:
        assert seen_states == [ControllerState.UNINITIALIZED]
        assert ctrl.state is ControllerState.SUBSCRIBED
    finally:
        ctrl.dispose()


def test_channel_failure_during_construction_is_kept_and_announced(qt_app, store, repository):
    store.close()

    ctrl = StudentController(repository)
    seen = []
    ctrl.channel_failed.connect(seen.append)
    try:
        assert ctrl.state is ControllerState.FAILED
        assert ctrl.channel_error is not None
        assert "closed" in ctrl.channel_error

        assert _pump_until(qt_app, lambda: len(seen) == 1)
        assert seen == [ctrl.channel_error]
    finally:
        ctrl.dispose()
    assert ctrl.state is ControllerState.DISPOSED


def test_channel_failure_after_dispose_is_ignored(qt_app, controller, store):
    seen = []
    controller.channel_failed.connect(seen.append)
    controller.dispose()

    controller._on_channel_error(RuntimeError("late"))

    qt_app.processEvents()
    assert seen == []
    assert controller.state is ControllerState.DISPOSED
    assert controller.channel_error is None
