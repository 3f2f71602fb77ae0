"""Helper utilities for constructing temporary documents roots in tests."""

from __future__ import annotations

import textwrap
from pathlib import Path
from typing import Mapping

from diranalyzer.locator import FileLocator
from diranalyzer.orchestrator import Orchestrator


class DocumentsBuilder:
    """Utility for writing text files under a throwaway documents root."""

    def __init__(self, tmp_path: Path) -> None:
        self.root = tmp_path / "documents"
        self.root.mkdir()

    def write(self, directory: str, files: Mapping[str, str]) -> Path:
        """Write `filename -> contents` entries into `root/directory`."""
        target = self.root / directory
        target.mkdir(parents=True, exist_ok=True)
        for filename, content in files.items():
            normalised = textwrap.dedent(content).lstrip("\n")
            (target / filename).write_text(normalised, encoding="utf-8")
        return target

    def orchestrator(self, **kwargs: object) -> Orchestrator:
        """Return an orchestrator rooted at this documents directory."""
        return Orchestrator(FileLocator(self.root), **kwargs)  # type: ignore[arg-type]

    def path(self) -> Path:
        return self.root


__all__ = ["DocumentsBuilder"]
