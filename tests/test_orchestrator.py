"""Tests for diranalyzer.orchestrator."""

from __future__ import annotations

import threading
from collections import Counter
from pathlib import Path
from typing import List

import pytest

from diranalyzer.config import default_settings
from diranalyzer.errors import AnalysisCancelled, FileReadFailure, NO_FILES_MESSAGE, NoFilesFound
from diranalyzer.models import AnalysisResult, RankedEntry
from diranalyzer.orchestrator import Orchestrator
from diranalyzer.tokenizer import Tokenizer
from tests._fixtures.documents_builder import DocumentsBuilder


def _assert_invariants(result: AnalysisResult, frequencies: Counter) -> None:
    assert sum(frequencies.values()) == result.word_count
    assert len(result.top_words) == min(10, len(frequencies))
    for first, second in zip(result.top_words, result.top_words[1:]):
        assert first.count > second.count or (
            first.count == second.count and first.word >= second.word
        )


def test_single_file_scenario(documents: DocumentsBuilder) -> None:
    documents.write("cats", {"mat.txt": "the cat sat on the mat\n"})

    evaluation = documents.orchestrator().evaluate_directory("cats")

    assert evaluation.ok is True
    assert evaluation.error is None
    result = evaluation.result
    assert result == AnalysisResult(
        name="cats",
        word_count=6,
        file_count=1,
        top_words=[
            RankedEntry("the", 2),
            RankedEntry("sat", 1),
            RankedEntry("on", 1),
            RankedEntry("mat", 1),
            RankedEntry("cat", 1),
        ],
    )


def test_empty_directory_reports_error(documents: DocumentsBuilder) -> None:
    (documents.path() / "empty").mkdir()

    evaluation = documents.orchestrator().evaluate_directory("empty")

    assert evaluation.ok is False
    assert evaluation.result is None
    assert evaluation.error == NO_FILES_MESSAGE


def test_analyze_raises_no_files(documents: DocumentsBuilder) -> None:
    with pytest.raises(NoFilesFound):
        documents.orchestrator().analyze("absent")


def test_invalid_name_reports_error(documents: DocumentsBuilder) -> None:
    evaluation = documents.orchestrator().evaluate_directory("../outside")

    assert evaluation.ok is False
    assert "Invalid directory name" in (evaluation.error or "")


def test_digits_and_punctuation_contribute_no_tokens(documents: DocumentsBuilder) -> None:
    documents.write("greeting", {"hello.txt": "Hello, World! 123\n"})

    result = documents.orchestrator().analyze("greeting")

    assert result.word_count == 2
    assert result.top_words == [RankedEntry("world", 1), RankedEntry("hello", 1)]


def test_pronoun_case_is_preserved(documents: DocumentsBuilder) -> None:
    documents.write("pronoun", {"can.txt": "I think I can\n"})

    result = documents.orchestrator().analyze("pronoun")

    assert result.word_count == 4
    assert result.top_words == [
        RankedEntry("I", 2),
        RankedEntry("think", 1),
        RankedEntry("can", 1),
    ]


@pytest.mark.parametrize("max_workers", [1, 4])
def test_multiple_files_sum_regardless_of_order(
    documents: DocumentsBuilder, max_workers: int
) -> None:
    documents.write(
        "pair",
        {
            "first.txt": "apple banana cherry\napple\n",
            "second.txt": "delta echo\n\nfoxtrot golf\n",
        },
    )

    result = documents.orchestrator(max_workers=max_workers).analyze("pair")

    assert result.file_count == 2
    assert result.word_count == 8
    assert result.top_words[0] == RankedEntry("apple", 2)
    _assert_invariants(
        result,
        Counter(
            {
                "apple": 2,
                "banana": 1,
                "cherry": 1,
                "delta": 1,
                "echo": 1,
                "foxtrot": 1,
                "golf": 1,
            }
        ),
    )


def test_top_words_capped_at_ten(documents: DocumentsBuilder) -> None:
    words = [f"word{chr(ord('a') + index)}" for index in range(12)]
    lines = "\n".join(" ".join([word] * (index + 1)) for index, word in enumerate(words))
    documents.write("many", {"many.txt": lines + "\n"})

    result = documents.orchestrator().analyze("many")

    assert len(result.top_words) == 10
    assert result.top_words[0] == RankedEntry("wordl", 12)
    assert result.word_count == sum(range(1, 13))


def test_results_are_idempotent(documents: DocumentsBuilder) -> None:
    documents.write(
        "stable",
        {f"part{index}.txt": "one two three two one one\n" for index in range(6)},
    )
    orchestrator = documents.orchestrator(max_workers=3)

    assert orchestrator.analyze("stable") == orchestrator.analyze("stable")


def test_parallel_and_sequential_agree(documents: DocumentsBuilder) -> None:
    documents.write(
        "corpus",
        {
            f"doc{index}.txt": " ".join(
                f"term{chr(97 + (index * 7 + offset) % 13)}" for offset in range(25)
            )
            for index in range(9)
        },
    )

    sequential = documents.orchestrator(max_workers=1).analyze("corpus")
    parallel = documents.orchestrator(max_workers=8).analyze("corpus")

    assert sequential == parallel
    assert parallel.word_count == 9 * 25


class _FailingTokenizer(Tokenizer):
    def tokenize_file(self, path: Path) -> List[List[str]]:
        if path.name == "broken.txt":
            raise FileReadFailure(path, OSError("disk error"))
        return super().tokenize_file(path)


@pytest.mark.parametrize("max_workers", [1, 4])
def test_read_failure_aborts_whole_analysis(
    documents: DocumentsBuilder, max_workers: int
) -> None:
    documents.write("mixed", {"good.txt": "fine words\n", "broken.txt": "unused\n"})
    orchestrator = documents.orchestrator(
        tokenizer=_FailingTokenizer(), max_workers=max_workers
    )

    with pytest.raises(FileReadFailure):
        orchestrator.evaluate_directory("mixed")


def test_cancelled_before_start(documents: DocumentsBuilder) -> None:
    documents.write("stop", {"a.txt": "a\n", "b.txt": "b\n"})
    cancel = threading.Event()
    cancel.set()

    with pytest.raises(AnalysisCancelled):
        documents.orchestrator().analyze("stop", cancel_event=cancel)


class _CancellingTokenizer(Tokenizer):
    def __init__(self, cancel: threading.Event) -> None:
        super().__init__()
        self.cancel = cancel
        self.calls = 0

    def tokenize_file(self, path: Path) -> List[List[str]]:
        self.calls += 1
        self.cancel.set()
        return super().tokenize_file(path)


def test_cancellation_checked_between_files(documents: DocumentsBuilder) -> None:
    documents.write("halt", {f"f{index}.txt": "word\n" for index in range(5)})
    cancel = threading.Event()
    tokenizer = _CancellingTokenizer(cancel)

    with pytest.raises(AnalysisCancelled):
        documents.orchestrator(tokenizer=tokenizer, max_workers=1).analyze(
            "halt", cancel_event=cancel
        )

    assert tokenizer.calls == 1


def test_from_settings_uses_configured_limits(tmp_path: Path) -> None:
    settings = default_settings(tmp_path)
    settings.analysis.top_n = 2
    settings.analysis.max_workers = 2
    books = settings.analysis.documents_root / "books"
    books.mkdir(parents=True)
    (books / "a.txt").write_text("x x x y y z\n", encoding="utf-8")

    orchestrator = Orchestrator.from_settings(settings)
    result = orchestrator.analyze("books")

    assert orchestrator.max_workers == 2
    assert result.top_words == [RankedEntry("x", 3), RankedEntry("y", 2)]


def test_invalid_worker_count_rejected(documents: DocumentsBuilder) -> None:
    with pytest.raises(ValueError):
        documents.orchestrator(max_workers=0)
