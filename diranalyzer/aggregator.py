"""Fold token streams into word counts and frequency tables."""

from __future__ import annotations

from itertools import chain
from typing import Iterable, Sequence

from .models import WordTally


class Aggregator:
    """Counts tokens; tallies from separate files combine by element-wise addition."""

    def fold(self, tokens: Iterable[str]) -> WordTally:
        tally = WordTally()
        for token in tokens:
            tally.word_count += 1
            tally.frequencies[token] += 1
        return tally

    def fold_lines(self, lines: Iterable[Sequence[str]]) -> WordTally:
        """Flatten per-line token lists and fold them into one tally."""
        return self.fold(chain.from_iterable(lines))

    def merge(self, tallies: Iterable[WordTally]) -> WordTally:
        """Combine tallies; the result does not depend on input order."""
        merged = WordTally()
        for tally in tallies:
            merged.word_count += tally.word_count
            merged.frequencies.update(tally.frequencies)
        return merged


__all__ = ["Aggregator"]
