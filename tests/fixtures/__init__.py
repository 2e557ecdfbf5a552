"""Test fixtures for the virtual shell.

This package provides reusable test fixtures:
- core: Filesystem, snapshot store and tree fixtures
- shell: Shell sessions with a fake editor and a controllable clock
- api: TestClient wired to a fresh in-memory filesystem
"""
