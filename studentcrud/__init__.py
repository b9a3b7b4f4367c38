"""Student CRUD desktop application (PySide6 + SQLite)."""
