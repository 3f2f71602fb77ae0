"""Core data models shared across diranalyzer components."""

from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class RankedEntry:
    """A word and its occurrence count within a ranked list."""

    word: str
    count: int

    def to_dict(self) -> Dict[str, Any]:
        return {"word": self.word, "count": self.count}


@dataclass
class WordTally:
    """Running totals produced by folding a token stream."""

    word_count: int = 0
    frequencies: Counter = field(default_factory=Counter)


@dataclass
class AnalysisResult:
    """Word statistics for one analyzed directory."""

    name: str
    word_count: int
    file_count: int
    top_words: List[RankedEntry] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "word_count": self.word_count,
            "file_count": self.file_count,
            "top_words": [entry.to_dict() for entry in self.top_words],
        }


@dataclass
class Evaluation:
    """Outcome of `evaluate_directory`: either a result or an error message."""

    ok: bool
    result: Optional[AnalysisResult] = None
    error: Optional[str] = None


@dataclass
class DirectoryRecord:
    """A directory name registered for analysis."""

    id: int
    name: str
    inserted_at: str

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "name": self.name, "inserted_at": self.inserted_at}
