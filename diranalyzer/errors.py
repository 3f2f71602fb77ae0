"""Exception types raised by the analysis pipeline and directory registry."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Mapping

NO_FILES_MESSAGE = "There are no .txt files in this directory"


class AnalysisError(RuntimeError):
    """Base class for failures surfaced by the analysis pipeline."""


class NoFilesFound(AnalysisError):
    """Raised when a directory contains no `.txt` files."""

    def __init__(self, message: str = NO_FILES_MESSAGE) -> None:
        super().__init__(message)
        self.message = message


class InvalidDirectoryName(AnalysisError):
    """Raised when a directory name cannot be used as a single path segment."""

    def __init__(self, name: object, reason: str) -> None:
        super().__init__(f"Invalid directory name {name!r}: {reason}")
        self.name = name
        self.reason = reason


class FileReadFailure(AnalysisError):
    """Raised when a located file cannot be read; aborts the whole analysis."""

    def __init__(self, path: Path, cause: BaseException) -> None:
        super().__init__(f"Failed to read {path}: {cause}")
        self.path = path
        self.cause = cause


class AnalysisCancelled(AnalysisError):
    """Raised when a cancellation signal is observed between file tasks."""


class DirectoryNotFound(KeyError):
    """Raised by the registry when a directory record does not exist."""

    def __init__(self, record_id: object) -> None:
        super().__init__(record_id)
        self.record_id = record_id

    def __str__(self) -> str:
        return f"Directory {self.record_id!r} not found"


class DirectoryValidationError(ValueError):
    """Raised when directory attributes fail validation on create."""

    def __init__(self, errors: Mapping[str, List[str]]) -> None:
        self.errors: Dict[str, List[str]] = {key: list(value) for key, value in errors.items()}
        summary = "; ".join(
            f"{field} {message}" for field, messages in self.errors.items() for message in messages
        )
        super().__init__(summary or "invalid directory attributes")


__all__ = [
    "AnalysisCancelled",
    "AnalysisError",
    "DirectoryNotFound",
    "DirectoryValidationError",
    "FileReadFailure",
    "InvalidDirectoryName",
    "NO_FILES_MESSAGE",
    "NoFilesFound",
]
