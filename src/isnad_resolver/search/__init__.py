"""
Registry search: filters, relevance ranking and paginated search.
"""

from isnad_resolver.search.engine import SearchHit, SearchPage, search_by_fields, search_narrators
from isnad_resolver.search.filters import SearchFilters, passes_filters
from isnad_resolver.search.relevance import matches_search_term, rank, relevance_score

__all__ = [
    "SearchFilters",
    "SearchHit",
    "SearchPage",
    "matches_search_term",
    "passes_filters",
    "rank",
    "relevance_score",
    "search_by_fields",
    "search_narrators",
]
