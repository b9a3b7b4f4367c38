from __future__ import annotations
from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class Student:
    """A single student row. `id` is assigned by the store on insert."""
    id: int
    name: str
    course: str


# Complete ordered contents of the students table at one instant.
Snapshot = Tuple[Student, ...]
