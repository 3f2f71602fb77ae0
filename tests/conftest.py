from __future__ import annotations

from pathlib import Path

import pytest

from tests._fixtures.documents_builder import DocumentsBuilder


@pytest.fixture
def documents(tmp_path: Path) -> DocumentsBuilder:
    """Provide a documents root builder under the pytest tmp_path."""
    return DocumentsBuilder(tmp_path)
