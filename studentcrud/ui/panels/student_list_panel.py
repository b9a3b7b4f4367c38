from __future__ import annotations

from typing import List, Optional

from PySide6 import QtCore, QtWidgets

from ...domain.models import Student


class _StudentCard(QtWidgets.QFrame):
    """One row: name, id badge, course, edit/delete buttons."""

    edit_clicked = QtCore.Signal(object)  # Student
    delete_clicked = QtCore.Signal(object)  # Student

    def __init__(self, student: Student, parent: Optional[QtWidgets.QWidget] = None) -> None:
        super().__init__(parent)
        self.student = student
        self.setFrameShape(QtWidgets.QFrame.StyledPanel)

        row = QtWidgets.QHBoxLayout(self)
        row.setContentsMargins(12, 8, 12, 8)

        text_col = QtWidgets.QVBoxLayout()
        lbl_name = QtWidgets.QLabel(student.name)
        lbl_name.setStyleSheet("font-size: 15px; font-weight: 600;")
        lbl_id = QtWidgets.QLabel(f"ID: {student.id}")
        lbl_id.setStyleSheet("color: #666; font-size: 11px;")
        lbl_course = QtWidgets.QLabel(f"Course: {student.course}")
        text_col.addWidget(lbl_name)
        text_col.addWidget(lbl_id)
        text_col.addWidget(lbl_course)
        row.addLayout(text_col, 1)

        btn_edit = QtWidgets.QPushButton("Edit")
        btn_delete = QtWidgets.QPushButton("Delete")
        btn_edit.clicked.connect(lambda: self.edit_clicked.emit(self.student))
        btn_delete.clicked.connect(lambda: self.delete_clicked.emit(self.student))
        row.addWidget(btn_edit)
        row.addWidget(btn_delete)


class StudentListPanel(QtWidgets.QWidget):
    """
    Renders a student snapshot. Each call to set_students() rebuilds the list
    from the full snapshot; rows are keyed by student id.
    """

    edit_requested = QtCore.Signal(object)  # Student
    delete_requested = QtCore.Signal(object)  # Student

    def __init__(self, parent: Optional[QtWidgets.QWidget] = None) -> None:
        super().__init__(parent)

        root = QtWidgets.QVBoxLayout(self)
        root.setContentsMargins(0, 0, 0, 0)

        self.stack = QtWidgets.QStackedWidget()

        empty = QtWidgets.QWidget()
        empty_col = QtWidgets.QVBoxLayout(empty)
        empty_col.addStretch(1)
        lbl_empty = QtWidgets.QLabel("No Students Yet")
        lbl_empty.setAlignment(QtCore.Qt.AlignCenter)
        lbl_empty.setStyleSheet("font-size: 18px; font-weight: 600;")
        lbl_hint = QtWidgets.QLabel("Click \"Add Student\" below to add your first student")
        lbl_hint.setAlignment(QtCore.Qt.AlignCenter)
        lbl_hint.setStyleSheet("color: #888;")
        empty_col.addWidget(lbl_empty)
        empty_col.addWidget(lbl_hint)
        empty_col.addStretch(1)

        self.list = QtWidgets.QListWidget()
        self.list.setSelectionMode(QtWidgets.QAbstractItemView.NoSelection)
        self.list.setSpacing(6)

        self.stack.addWidget(empty)
        self.stack.addWidget(self.list)
        root.addWidget(self.stack)

    @QtCore.Slot(list)
    def set_students(self, students: List[Student]) -> None:
        self.list.clear()
        for student in students:
            card = _StudentCard(student)
            card.edit_clicked.connect(self.edit_requested.emit)
            card.delete_clicked.connect(self.delete_requested.emit)
            item = QtWidgets.QListWidgetItem()
            item.setData(QtCore.Qt.UserRole, student.id)
            item.setSizeHint(card.sizeHint())
            self.list.addItem(item)
            self.list.setItemWidget(item, card)
        self.stack.setCurrentIndex(1 if students else 0)
