from __future__ import annotations

from .normalizer import normalize, normalize_word
from .scorer import levenshtein, score
from .locator import (
    ACCEPT_THRESHOLD,
    LocateResult,
    MatchCandidate,
    NormalizedWord,
    locate,
    pair_words,
    window_sizes,
)

__all__ = [
    "ACCEPT_THRESHOLD",
    "LocateResult",
    "MatchCandidate",
    "NormalizedWord",
    "levenshtein",
    "locate",
    "normalize",
    "normalize_word",
    "pair_words",
    "score",
    "window_sizes",
]
