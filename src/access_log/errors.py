"""Errors raised while setting up access logging."""

from __future__ import annotations


class DirectoryCreationError(OSError):
    """The log directory could not be created at startup."""

    def __init__(self, directory: str, reason: str) -> None:
        super().__init__(f"Cannot create log directory {directory}: {reason}")
        self.directory = directory
