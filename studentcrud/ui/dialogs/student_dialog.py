from __future__ import annotations

from typing import Optional, Tuple

from PySide6 import QtWidgets

from ...domain.models import Student
from ...validation import clean_student_fields, is_valid


class StudentDialog(QtWidgets.QDialog):
    """Add/edit form for a student. Save stays disabled until both fields are filled."""

    def __init__(self, title: str, student: Optional[Student] = None, parent: Optional[QtWidgets.QWidget] = None) -> None:
        super().__init__(parent)
        self.setWindowTitle(title)
        self.setModal(True)
        self.setMinimumWidth(380)

        root = QtWidgets.QVBoxLayout(self)
        root.setContentsMargins(16, 16, 16, 16)
        root.setSpacing(12)

        lbl_title = QtWidgets.QLabel(title)
        lbl_title.setStyleSheet("font-size: 18px; font-weight: 600;")
        root.addWidget(lbl_title)

        form = QtWidgets.QFormLayout()
        self.name_edit = QtWidgets.QLineEdit(student.name if student else "")
        self.course_edit = QtWidgets.QLineEdit(student.course if student else "")
        form.addRow("Name *", self.name_edit)
        form.addRow("Course *", self.course_edit)
        root.addLayout(form)

        hint = QtWidgets.QLabel("* Required fields")
        hint.setStyleSheet("color: #b00020; font-size: 11px;")
        root.addWidget(hint)

        self.button_box = QtWidgets.QDialogButtonBox(
            QtWidgets.QDialogButtonBox.Save | QtWidgets.QDialogButtonBox.Cancel
        )
        self.button_box.accepted.connect(self.accept)
        self.button_box.rejected.connect(self.reject)
        root.addWidget(self.button_box)

        self.name_edit.textChanged.connect(self._refresh_save)
        self.course_edit.textChanged.connect(self._refresh_save)
        self._refresh_save()

    def _refresh_save(self) -> None:
        ok = is_valid(self.name_edit.text(), self.course_edit.text())
        self.button_box.button(QtWidgets.QDialogButtonBox.Save).setEnabled(ok)

    def values(self) -> Tuple[str, str]:
        """Trimmed (name, course). Raises ValidationError if either is blank."""
        return clean_student_fields(self.name_edit.text(), self.course_edit.text())


def confirm_delete(student: Student, parent: Optional[QtWidgets.QWidget] = None) -> bool:
    answer = QtWidgets.QMessageBox.question(
        parent,
        "Delete Student?",
        f"Are you sure you want to delete {student.name}? This action cannot be undone.",
        QtWidgets.QMessageBox.Yes | QtWidgets.QMessageBox.Cancel,
        QtWidgets.QMessageBox.Cancel,
    )
    return answer == QtWidgets.QMessageBox.Yes
