"""Data access and repository layer for students.

These modules are UI-free; the UI only talks to StudentRepository through
the controller, never to the store directly.
"""
