"""Storage backends for diranalyzer."""

from .directory_store import DirectoryStore, JsonDirectoryStore

__all__ = ["DirectoryStore", "JsonDirectoryStore"]
