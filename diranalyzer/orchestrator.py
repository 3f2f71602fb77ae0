"""Pipeline orchestration for directory word-frequency analysis."""

from __future__ import annotations

import threading
from concurrent.futures import FIRST_COMPLETED, Future, ThreadPoolExecutor, wait
from pathlib import Path
from typing import List, Optional, Sequence, Set

from .aggregator import Aggregator
from .config import DEFAULT_MAX_WORKERS, AnalyzerSettings
from .errors import AnalysisCancelled, InvalidDirectoryName, NoFilesFound
from .locator import FileLocator
from .logging import get_logger
from .models import AnalysisResult, Evaluation, WordTally
from .ranking import RankSelector
from .tokenizer import Tokenizer


class Orchestrator:
    """Coordinates locating, tokenizing, counting and ranking for one directory."""

    def __init__(
        self,
        locator: FileLocator,
        tokenizer: Tokenizer | None = None,
        aggregator: Aggregator | None = None,
        selector: RankSelector | None = None,
        *,
        max_workers: int = DEFAULT_MAX_WORKERS,
    ) -> None:
        if max_workers < 1:
            raise ValueError(f"max_workers must be at least 1 (got {max_workers})")
        self.locator = locator
        self.tokenizer = tokenizer or Tokenizer()
        self.aggregator = aggregator or Aggregator()
        self.selector = selector or RankSelector()
        self.max_workers = max_workers
        self.logger = get_logger("orchestrator")

    @classmethod
    def from_settings(cls, settings: AnalyzerSettings) -> "Orchestrator":
        analysis = settings.analysis
        return cls(
            FileLocator(analysis.documents_root),
            Tokenizer(encoding=analysis.encoding),
            selector=RankSelector(limit=analysis.top_n),
            max_workers=analysis.max_workers,
        )

    def evaluate_directory(self, name: str) -> Evaluation:
        """Analyze `name`, reporting recoverable failures as an error message.

        File read failures are not recoverable and propagate to the caller.
        """
        try:
            result = self.analyze(name)
        except (NoFilesFound, InvalidDirectoryName) as exc:
            self.logger.info("Evaluation of %r failed: %s", name, exc)
            return Evaluation(ok=False, error=str(exc))
        return Evaluation(ok=True, result=result)

    def analyze(
        self, name: str, *, cancel_event: threading.Event | None = None
    ) -> AnalysisResult:
        """Return word statistics for the named directory."""
        self.logger.info("Starting analysis of %r", name)
        files = self.locator.locate(name)
        tally = self._tally_files(files, cancel_event)
        top_words = self.selector.select(tally.frequencies)
        result = AnalysisResult(
            name=name,
            word_count=tally.word_count,
            file_count=len(files),
            top_words=top_words,
        )
        self.logger.info(
            "Analyzed %r: %d words across %d files (%d distinct)",
            name,
            result.word_count,
            result.file_count,
            len(tally.frequencies),
        )
        return result

    def _tally_file(self, path: Path, cancel_event: Optional[threading.Event]) -> WordTally:
        _check_cancelled(cancel_event)
        return self.aggregator.fold_lines(self.tokenizer.tokenize_file(path))

    def _tally_files(
        self, files: Sequence[Path], cancel_event: Optional[threading.Event]
    ) -> WordTally:
        _check_cancelled(cancel_event)
        workers = min(self.max_workers, len(files))
        tallies: List[WordTally] = []
        if workers <= 1:
            for path in files:
                tallies.append(self._tally_file(path, cancel_event))
            _check_cancelled(cancel_event)
            return self.aggregator.merge(tallies)

        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="diranalyzer") as executor:
            pending: Set[Future[WordTally]] = {
                executor.submit(self._tally_file, path, cancel_event) for path in files
            }
            try:
                while pending:
                    done, pending = wait(pending, return_when=FIRST_COMPLETED)
                    for future in done:
                        tallies.append(future.result())
                    _check_cancelled(cancel_event)
            except BaseException:
                for future in pending:
                    future.cancel()
                raise
        return self.aggregator.merge(tallies)


def _check_cancelled(cancel_event: Optional[threading.Event]) -> None:
    if cancel_event is not None and cancel_event.is_set():
        raise AnalysisCancelled("Analysis cancelled")


__all__ = ["Orchestrator"]
