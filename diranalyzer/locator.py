"""Resolve directory names to text files under the documents root."""

from __future__ import annotations

from pathlib import Path
from typing import List

from .errors import InvalidDirectoryName, NoFilesFound
from .logging import get_logger

TEXT_FILE_PATTERN = "*.txt"

_SEPARATORS = ("/", "\\")


def validate_directory_name(name: object) -> str:
    """Return `name` when it is a usable single path segment, else raise."""
    if not isinstance(name, str):
        raise InvalidDirectoryName(name, "must be a string")
    if not name or not name.strip():
        raise InvalidDirectoryName(name, "must not be empty")
    if name in {".", ".."}:
        raise InvalidDirectoryName(name, "must not refer to the current or parent directory")
    if any(separator in name for separator in _SEPARATORS):
        raise InvalidDirectoryName(name, "must not contain path separators")
    if "\x00" in name:
        raise InvalidDirectoryName(name, "must not contain NUL bytes")
    return name


class FileLocator:
    """Enumerates `.txt` files for a named directory under a fixed root."""

    def __init__(self, root: Path | str) -> None:
        self.root = Path(root).expanduser().resolve()
        self.logger = get_logger("locator")

    def resolve(self, name: str) -> Path:
        """Return the absolute directory path for `name`."""
        return self.root / validate_directory_name(name)

    def locate(self, name: str) -> List[Path]:
        """Return the `.txt` files in the named directory in filesystem order."""
        directory = self.resolve(name)
        files = [path for path in directory.glob(TEXT_FILE_PATTERN) if path.is_file()]
        self.logger.debug("Located %d text files in %s", len(files), directory)
        if not files:
            raise NoFilesFound()
        return files


__all__ = ["FileLocator", "TEXT_FILE_PATTERN", "validate_directory_name"]
