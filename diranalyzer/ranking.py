"""Top-N selection over a frequency table."""

from __future__ import annotations

from typing import List, Mapping, Tuple

from .models import RankedEntry

DEFAULT_LIMIT = 10


def _rank_key(item: Tuple[str, int]) -> Tuple[int, str]:
    word, count = item
    return count, word


class RankSelector:
    """Orders words by count, breaking ties with the lexicographically greater word first."""

    def __init__(self, limit: int = DEFAULT_LIMIT) -> None:
        if limit < 0:
            raise ValueError(f"limit must be non-negative (got {limit})")
        self.limit = limit

    def select(self, frequencies: Mapping[str, int]) -> List[RankedEntry]:
        # Plain str comparison orders by code point, independent of locale.
        ordered = sorted(frequencies.items(), key=_rank_key, reverse=True)
        return [RankedEntry(word=word, count=count) for word, count in ordered[: self.limit]]


__all__ = ["DEFAULT_LIMIT", "RankSelector"]
