"""Test suite for the service building blocks.

- unit/: mocked collaborators, no I/O
- integration/: SQLite (aiosqlite) database file per test
- utils/: sample Todo aggregate shared by both
"""
