"""
isnad_resolver

Narrator identity resolution for hadith transmission chains: Arabic/English
name normalization, patronymic decomposition, similarity scoring, candidate
matching against a narrator registry, and relevance-ranked registry search.
"""

from isnad_resolver.matching.chain import ExtractedNarrator, resolve_chain
from isnad_resolver.matching.matcher import MatchCandidate, MatchSettings, find_matches
from isnad_resolver.matching.similarity import similarity_arabic, similarity_english
from isnad_resolver.names.decomposer import NameComponents, decompose_name
from isnad_resolver.normalization.script import is_arabic_script
from isnad_resolver.normalization.text import (
    normalize_arabic,
    normalize_english,
    normalize_search_term,
)
from isnad_resolver.registry.entities import NarratorRecord, NarratorRegistry
from isnad_resolver.search.engine import search_by_fields, search_narrators
from isnad_resolver.search.filters import SearchFilters
from isnad_resolver.search.relevance import rank, relevance_score

__version__ = "0.1.0"

__all__ = [
    "ExtractedNarrator",
    "MatchCandidate",
    "MatchSettings",
    "NameComponents",
    "NarratorRecord",
    "NarratorRegistry",
    "SearchFilters",
    "decompose_name",
    "find_matches",
    "is_arabic_script",
    "normalize_arabic",
    "normalize_english",
    "normalize_search_term",
    "rank",
    "relevance_score",
    "resolve_chain",
    "search_by_fields",
    "search_narrators",
    "similarity_arabic",
    "similarity_english",
]
