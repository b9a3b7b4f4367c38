import os


# Storage
STUDENT_DB_PATH: str = os.environ.get(
    "STUDENT_DB_PATH",
    os.path.join(os.path.expanduser("~"), ".studentcrud", "students.db"),
)
STUDENT_TABLE: str = "students"

# Background writes: 1 keeps a controller's intents in issue order
WRITE_WORKERS: int = max(1, int(os.environ.get("WRITE_WORKERS", "1")))
# How long shutdown waits for in-flight writes (ms)
SHUTDOWN_WAIT_MS: int = int(os.environ.get("SHUTDOWN_WAIT_MS", "3000"))

# Logging
LOG_LEVEL: str = os.environ.get("LOG_LEVEL", "INFO").upper()
LOG_FORMAT: str = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATEFMT: str = "%H:%M:%S"

# Window
WINDOW_TITLE: str = "Student Management"
WINDOW_MIN_W: int = int(os.environ.get("WINDOW_MIN_W", "480"))
WINDOW_MIN_H: int = int(os.environ.get("WINDOW_MIN_H", "640"))
STATUS_MESSAGE_MS: int = 5000
