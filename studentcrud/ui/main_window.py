from __future__ import annotations
from typing import List, Optional

from PySide6 import QtCore, QtWidgets

from .. import config
from ..domain.models import Student
from ..errors import ValidationError
from .controllers.main_controller import MainController
from .dialogs.student_dialog import StudentDialog, confirm_delete
from .panels.student_list_panel import StudentListPanel


class MainWindow(QtWidgets.QMainWindow):
    def __init__(self, db_path: Optional[str] = None) -> None:
        super().__init__()
        self.setWindowTitle(config.WINDOW_TITLE)
        self.setMinimumSize(config.WINDOW_MIN_W, config.WINDOW_MIN_H)

        # Initialize Controller
        self.controller = MainController(db_path)

        # UI Setup
        self._setup_ui()

        # Connect Signals
        self._connect_signals()

        # Initial render from the snapshot delivered on subscribe
        self._on_students_changed(self.controller.students.students)

    def _setup_ui(self):
        central = QtWidgets.QWidget()
        layout = QtWidgets.QVBoxLayout(central)
        layout.setContentsMargins(12, 12, 12, 12)
        layout.setSpacing(8)

        self.lbl_title = QtWidgets.QLabel(config.WINDOW_TITLE)
        self.lbl_title.setStyleSheet("font-size: 20px; font-weight: 700;")
        self.lbl_count = QtWidgets.QLabel("0 students")
        self.lbl_count.setStyleSheet("color: #666;")
        layout.addWidget(self.lbl_title)
        layout.addWidget(self.lbl_count)

        self.list_panel = StudentListPanel()
        layout.addWidget(self.list_panel, 1)

        btn_row = QtWidgets.QHBoxLayout()
        btn_row.addStretch(1)
        self.btn_add = QtWidgets.QPushButton("Add Student")
        btn_row.addWidget(self.btn_add)
        layout.addLayout(btn_row)

        self.setCentralWidget(central)

    def _connect_signals(self):
        students = self.controller.students
        # Emitted from write workers; AutoConnection queues onto the GUI thread
        students.students_changed.connect(self._on_students_changed)
        students.write_failed.connect(self._on_write_failed)
        students.channel_failed.connect(self._on_channel_failed)

        self.btn_add.clicked.connect(self._on_add_clicked)
        self.list_panel.edit_requested.connect(self._on_edit_requested)
        self.list_panel.delete_requested.connect(self._on_delete_requested)

    @QtCore.Slot(list)
    def _on_students_changed(self, students: List[Student]) -> None:
        self.list_panel.set_students(students)
        self.lbl_count.setText(f"{len(students)} students")

    @QtCore.Slot(str, str)
    def _on_write_failed(self, intent: str, message: str) -> None:
        self.statusBar().showMessage(f"{intent} failed: {message}", config.STATUS_MESSAGE_MS)

    @QtCore.Slot(str)
    def _on_channel_failed(self, message: str) -> None:
        self.statusBar().showMessage(f"Student list stopped updating: {message}")

    def _on_add_clicked(self) -> None:
        dlg = StudentDialog("Add New Student", parent=self)
        if dlg.exec() != QtWidgets.QDialog.Accepted:
            return
        try:
            name, course = dlg.values()
        except ValidationError as exc:
            self.statusBar().showMessage(str(exc), config.STATUS_MESSAGE_MS)
            return
        self.controller.students.add_student(name, course)

    def _on_edit_requested(self, student: Student) -> None:
        dlg = StudentDialog("Edit Student", student=student, parent=self)
        if dlg.exec() != QtWidgets.QDialog.Accepted:
            return
        try:
            name, course = dlg.values()
        except ValidationError as exc:
            self.statusBar().showMessage(str(exc), config.STATUS_MESSAGE_MS)
            return
        self.controller.students.update_student(student.id, name, course)

    def _on_delete_requested(self, student: Student) -> None:
        if confirm_delete(student, parent=self):
            self.controller.students.delete_student(student.id)
