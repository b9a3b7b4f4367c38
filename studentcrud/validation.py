"""Input checks for the add/edit dialog.

The store accepts any text; blank names or courses are rejected here, at the
point where the user submits the form.
"""

from __future__ import annotations

from typing import Optional, Tuple

from .errors import ValidationError


def clean_field(text: Optional[str], *, field: str) -> str:
    """Return `text` trimmed, or raise ValidationError if nothing is left."""
    t = (text or "").strip()
    if not t:
        raise ValidationError(field)
    return t


def clean_student_fields(name: Optional[str], course: Optional[str]) -> Tuple[str, str]:
    return clean_field(name, field="Name"), clean_field(course, field="Course")


def is_valid(name: Optional[str], course: Optional[str]) -> bool:
    return bool((name or "").strip()) and bool((course or "").strip())
