"""Word-frequency statistics for directories of plain-text files."""

from .errors import (
    AnalysisCancelled,
    AnalysisError,
    FileReadFailure,
    InvalidDirectoryName,
    NoFilesFound,
)
from .models import AnalysisResult, Evaluation, RankedEntry
from .orchestrator import Orchestrator

__all__ = [
    "AnalysisCancelled",
    "AnalysisError",
    "AnalysisResult",
    "Evaluation",
    "FileReadFailure",
    "InvalidDirectoryName",
    "NoFilesFound",
    "Orchestrator",
    "RankedEntry",
]
