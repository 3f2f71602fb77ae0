"""Persistent registry of directory names available for analysis."""

from __future__ import annotations

import json
import os
import threading
from datetime import UTC, datetime
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Protocol, Tuple

from ..errors import DirectoryNotFound, DirectoryValidationError, InvalidDirectoryName
from ..locator import validate_directory_name
from ..logging import get_logger
from ..models import DirectoryRecord

_STORE_VERSION = 1


class DirectoryStore(Protocol):
    """Create/read/delete contract used by the CLI and HTTP surfaces."""

    def list(self) -> List[DirectoryRecord]: ...

    def get(self, record_id: int) -> Optional[DirectoryRecord]: ...

    def get_or_fail(self, record_id: int) -> DirectoryRecord: ...

    def create(self, attrs: Mapping[str, object]) -> DirectoryRecord: ...

    def delete(self, record: DirectoryRecord) -> DirectoryRecord: ...


class JsonDirectoryStore:
    """Stores directory records in a versioned JSON file; `path=None` keeps them in memory."""

    def __init__(self, path: Path | None) -> None:
        self._path = path
        self._records: Dict[int, DirectoryRecord] = {}
        self._next_id = 1
        self._lock = threading.Lock()
        self.logger = get_logger("stores.directories")
        if self._path is not None:
            self._refresh()

    def list(self) -> List[DirectoryRecord]:
        with self._lock:
            self._refresh()
            return [self._records[key] for key in sorted(self._records)]

    def get(self, record_id: int) -> Optional[DirectoryRecord]:
        with self._lock:
            self._refresh()
            return self._records.get(record_id)

    def get_or_fail(self, record_id: int) -> DirectoryRecord:
        record = self.get(record_id)
        if record is None:
            raise DirectoryNotFound(record_id)
        return record

    def create(self, attrs: Mapping[str, object]) -> DirectoryRecord:
        with self._lock:
            # Other processes may share the file; validate and allocate against its contents.
            self._refresh()
            name = self._validate(attrs)
            record = DirectoryRecord(
                id=self._next_id,
                name=name,
                inserted_at=datetime.now(UTC).isoformat().replace("+00:00", "Z"),
            )
            records = dict(self._records)
            records[record.id] = record
            self._commit(records, self._next_id + 1)
        self.logger.debug("Registered directory %r as id %d", record.name, record.id)
        return record

    def delete(self, record: DirectoryRecord) -> DirectoryRecord:
        with self._lock:
            self._refresh()
            if record.id not in self._records:
                raise DirectoryNotFound(record.id)
            records = dict(self._records)
            removed = records.pop(record.id)
            self._commit(records, self._next_id)
        self.logger.debug("Removed directory %r (id %d)", removed.name, removed.id)
        return removed

    # ------------------------------------------------------------------
    # Internal helpers

    def _validate(self, attrs: Mapping[str, object]) -> str:
        errors: Dict[str, List[str]] = {}
        raw_name = attrs.get("name")
        name = ""
        if raw_name is None or (isinstance(raw_name, str) and not raw_name.strip()):
            errors.setdefault("name", []).append("can't be blank")
        else:
            try:
                name = validate_directory_name(raw_name)
            except InvalidDirectoryName as exc:
                errors.setdefault("name", []).append(exc.reason)
            else:
                if any(record.name == name for record in self._records.values()):
                    errors.setdefault("name", []).append("has already been taken")
        if errors:
            raise DirectoryValidationError(errors)
        return name

    def _commit(self, records: Dict[int, DirectoryRecord], next_id: int) -> None:
        """Write the snapshot first; in-memory state changes only once it is on disk."""
        if self._path is not None:
            self._write(self._path, records, next_id)
        self._records = records
        self._next_id = next_id

    def _write(self, path: Path, records: Dict[int, DirectoryRecord], next_id: int) -> None:
        payload = {
            "version": _STORE_VERSION,
            "next_id": next_id,
            "directories": [records[key].to_dict() for key in sorted(records)],
        }
        path.parent.mkdir(parents=True, exist_ok=True)
        staging = path.with_name(f"{path.name}.tmp")
        try:
            staging.write_text(json.dumps(payload, indent=2, sort_keys=True), encoding="utf-8")
            os.replace(staging, path)
        except OSError:
            staging.unlink(missing_ok=True)
            raise

    def _refresh(self) -> None:
        if self._path is not None:
            self._records, self._next_id = self._read(self._path)

    def _read(self, path: Path) -> Tuple[Dict[int, DirectoryRecord], int]:
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return {}, 1
        except (OSError, json.JSONDecodeError) as exc:
            self.logger.warning("Ignoring unreadable directory store %s: %s", path, exc)
            return {}, 1
        if not isinstance(data, dict) or data.get("version") != _STORE_VERSION:
            return {}, 1
        entries = data.get("directories")
        if not isinstance(entries, list):
            return {}, 1
        records: Dict[int, DirectoryRecord] = {}
        for raw in entries:
            record = _record_from_dict(raw)
            if record is not None:
                records[record.id] = record
        next_id = data.get("next_id")
        highest = max(records, default=0) + 1
        if isinstance(next_id, int) and not isinstance(next_id, bool):
            return records, max(next_id, highest)
        return records, highest


def _record_from_dict(payload: object) -> Optional[DirectoryRecord]:
    if not isinstance(payload, dict):
        return None
    record_id = payload.get("id")
    name = payload.get("name")
    inserted_at = payload.get("inserted_at")
    if (
        not isinstance(record_id, int)
        or isinstance(record_id, bool)
        or not isinstance(name, str)
        or not isinstance(inserted_at, str)
    ):
        return None
    return DirectoryRecord(id=record_id, name=name, inserted_at=inserted_at)


__all__ = ["DirectoryStore", "JsonDirectoryStore"]
