"""
Similarity scoring, candidate matching and chain resolution.
"""

from isnad_resolver.matching.chain import (
    ChainResolution,
    ExtractedNarrator,
    NarratorMatchResult,
    resolve_chain,
)
from isnad_resolver.matching.matcher import MatchCandidate, MatchSettings, find_matches
from isnad_resolver.matching.similarity import (
    similarity_arabic,
    similarity_english,
    word_similarity,
)

__all__ = [
    "ChainResolution",
    "ExtractedNarrator",
    "MatchCandidate",
    "MatchSettings",
    "NarratorMatchResult",
    "find_matches",
    "resolve_chain",
    "similarity_arabic",
    "similarity_english",
    "word_similarity",
]
