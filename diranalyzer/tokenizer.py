"""Line-oriented tokenization and normalization of text files."""

from __future__ import annotations

import re
import unicodedata
from functools import lru_cache
from pathlib import Path
from typing import Iterable, List

from .errors import FileReadFailure
from .logging import get_logger

# The standalone pronoun keeps its case; every other token is lowercased.
PRESERVED_TOKEN = "I"

_WORD_RUN = re.compile(r"\w+")
_NEWLINES = re.compile(r"\n+")


@lru_cache(maxsize=4096)
def _is_removed(char: str) -> bool:
    category = unicodedata.category(char)
    # Every numeric category counts as a digit: Nd, Nl (roman numerals), No (superscripts, fractions).
    return category[0] in {"P", "S", "N"}


def strip_punctuation_and_digits(text: str) -> str:
    """Delete punctuation, symbol and numeric characters without leaving a gap."""
    return "".join(char for char in text if not _is_removed(char))


def normalize_case(text: str) -> str:
    """Lowercase each word run unless the run is exactly the pronoun `I`."""

    def _lower(match: re.Match[str]) -> str:
        word = match.group(0)
        return word if word == PRESERVED_TOKEN else word.lower()

    return _WORD_RUN.sub(_lower, text)


def _split(cleaned: str) -> List[str]:
    return _NEWLINES.sub("", cleaned).split()


class Tokenizer:
    """Converts file content into per-line lists of normalized tokens."""

    def __init__(self, encoding: str = "utf-8") -> None:
        self.encoding = encoding
        self.logger = get_logger("tokenizer")

    def tokenize_line(self, line: str) -> List[str]:
        return _split(normalize_case(strip_punctuation_and_digits(line)))

    def tokenize_lines(self, lines: Iterable[str]) -> List[List[str]]:
        """Return one token list per line, skipping lines left as a bare newline."""
        chunks: List[List[str]] = []
        for line in lines:
            cleaned = normalize_case(strip_punctuation_and_digits(line))
            if cleaned == "\n":
                continue
            chunks.append(_split(cleaned))
        return chunks

    def tokenize_file(self, path: Path) -> List[List[str]]:
        """Read `path` line by line; any read or decode error aborts with FileReadFailure."""
        try:
            with path.open("r", encoding=self.encoding) as handle:
                chunks = self.tokenize_lines(handle)
        except (OSError, UnicodeDecodeError) as exc:
            raise FileReadFailure(path, exc) from exc
        self.logger.debug("Tokenized %s into %d lines", path.name, len(chunks))
        return chunks


__all__ = [
    "PRESERVED_TOKEN",
    "Tokenizer",
    "normalize_case",
    "strip_punctuation_and_digits",
]
