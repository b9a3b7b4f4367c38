from __future__ import annotations

import pytest

from studentcrud.domain.models import Student
from studentcrud.errors import NotFoundError


def test_all_students_is_the_store_channel(repository, store):
    assert repository.all_students is store.query_all()
    assert repository.observe_all() is store.query_all()


def test_writes_pass_through(repository, recorder):
    repository.observe_all().subscribe(recorder.on_next)

    ada = repository.insert("Ada", "CS")
    repository.update(ada.id, "Ada L.", "CS")
    repository.insert("Grace", "Math")
    repository.delete(ada.id)

    assert recorder.last == [Student(2, "Grace", "Math")]
    assert len(recorder.snapshots) == 5


def test_failures_propagate_unchanged(repository):
    with pytest.raises(NotFoundError):
        repository.update(7, "x", "y")
    with pytest.raises(NotFoundError):
        repository.delete(7)
