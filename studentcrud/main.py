from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, Sequence

from . import config

# Configure logging
logging.basicConfig(
    level=getattr(logging, config.LOG_LEVEL, logging.INFO),
    format=config.LOG_FORMAT,
    datefmt=config.LOG_DATEFMT,
)


def run_qt(db_path: Optional[str] = None) -> int:
    from PySide6 import QtWidgets  # type: ignore
    from .ui.main_window import MainWindow

    app = QtWidgets.QApplication(sys.argv[:1])

    win = MainWindow(db_path)
    win.show()

    # Connect application quit to controller shutdown
    app.aboutToQuit.connect(win.controller.shutdown)

    rc = app.exec()
    return int(rc)


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="studentcrud", description="Manage student records.")
    parser.add_argument("--db", dest="db_path", default=None, help=f"SQLite file (default: {config.STUDENT_DB_PATH})")
    args = parser.parse_args(argv)
    return run_qt(args.db_path)


if __name__ == "__main__":
    raise SystemExit(main())
