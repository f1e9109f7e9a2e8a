"""
engine.py
Full-registry narrator search.

Steps:
  1. Split the query into terms (minimum term length applies).
  2. Keep records where EVERY term matches some searchable field.
  3. Drop records failing the rank/residence filters.
  4. Score with relevance_score, order, then paginate.

search_by_fields is the unscored lookup by Arabic name, English name or
death year.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Sequence

from isnad_resolver.config import get_config
from isnad_resolver.core.exceptions import SearchQueryError
from isnad_resolver.logging import get_logger
from isnad_resolver.normalization.script import is_arabic_script
from isnad_resolver.normalization.text import normalize_arabic, normalize_search_term
from isnad_resolver.registry.entities import NarratorRecord
from isnad_resolver.search.filters import SearchFilters, passes_filters
from isnad_resolver.search.relevance import matches_search_term, rank

log = get_logger("search")


@dataclass(slots=True)
class SearchHit:
    record: NarratorRecord
    score: float


@dataclass(slots=True)
class SearchPage:
    results: List[SearchHit] = field(default_factory=list)
    total: int = 0
    limit: int = 50
    offset: int = 0

    @property
    def count(self) -> int:
        return len(self.results)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "narrators": [
                {**hit.record.to_dict(), "relevance_score": hit.score}
                for hit in self.results
            ],
            "count": self.count,
            "total": self.total,
            "limit": self.limit,
            "offset": self.offset,
        }


def split_terms(query: Optional[str], min_term_length: int) -> List[str]:
    if not query:
        return []
    return [t for t in query.split() if len(t) >= min_term_length]


def _record_matches_terms(
    record: NarratorRecord,
    normalized_terms: List[str],
    original_terms: List[str],
) -> bool:
    fields = record.searchable_fields()
    normalized_fields = [(normalize_search_term(f), is_arabic_script(f)) for f in fields]

    for term, original in zip(normalized_terms, original_terms):
        term_is_arabic = is_arabic_script(original)
        if not any(
            matches_search_term(norm_field, term, term_is_arabic or field_is_arabic)
            for norm_field, field_is_arabic in normalized_fields
        ):
            return False
    return True


def search_narrators(
    records: Iterable[NarratorRecord],
    query: Optional[str],
    filters: Optional[SearchFilters] = None,
    limit: Optional[int] = None,
    offset: int = 0,
    min_term_length: Optional[int] = None,
) -> SearchPage:
    """
    Search the registry; raises SearchQueryError when a non-empty query has
    no term long enough to search for.
    """
    cfg = get_config()
    if limit is None:
        limit = int(cfg.search["default_limit"])
    if min_term_length is None:
        min_term_length = int(cfg.search["min_term_length"])

    if not query or not query.strip():
        return SearchPage(limit=limit, offset=offset)

    terms = split_terms(query, min_term_length)
    if not terms:
        raise SearchQueryError(
            f"Search query must contain at least one term with {min_term_length} or more characters"
        )
    normalized_terms = [normalize_search_term(t) for t in terms]

    candidates = [
        record
        for record in records
        if _record_matches_terms(record, normalized_terms, terms)
        and passes_filters(record, filters)
    ]
    ranked = rank(candidates, normalized_terms, terms)

    offset = max(0, offset)
    page = ranked[offset:offset + max(0, limit)]
    log.debug("search %r terms=%d hits=%d page=%d", query, len(terms), len(ranked), len(page))

    return SearchPage(
        results=[SearchHit(record=r, score=s) for r, s in page],
        total=len(ranked),
        limit=limit,
        offset=offset,
    )


# ---------------------------------------------------------------------------
# Field lookup
# ---------------------------------------------------------------------------

def _contains_arabic(field_value: Optional[str], needles: Sequence[str]) -> bool:
    if not field_value:
        return False
    haystacks = (field_value, normalize_arabic(field_value))
    return any(n in h for n in needles for h in haystacks)


def _contains_english(field_value: Optional[str], needle: str) -> bool:
    return bool(field_value) and needle in field_value.lower()


def _matches_fields(
    record: NarratorRecord,
    arabic_needles: Sequence[str],
    english_needle: str,
    death_year_ah: Optional[int],
) -> bool:
    if arabic_needles and not (
        _contains_arabic(record.primary_arabic_name, arabic_needles)
        or _contains_arabic(record.full_name_arabic, arabic_needles)
    ):
        return False
    if english_needle and not (
        _contains_english(record.primary_english_name, english_needle)
        or _contains_english(record.full_name_english, english_needle)
    ):
        return False
    if death_year_ah is not None and death_year_ah not in (
        record.death_year_ah,
        record.death_year_ah_alternative,
    ):
        return False
    return True


def search_by_fields(
    records: Iterable[NarratorRecord],
    arabic_name: Optional[str] = None,
    english_name: Optional[str] = None,
    death_year_ah: Optional[int] = None,
    limit: Optional[int] = None,
    offset: int = 0,
) -> SearchPage:
    """
    Unscored lookup by individual fields, AND-combined:

      arabic_name    substring of the primary or full Arabic name, as typed
                     or normalized
      english_name   case-insensitive substring of the primary or full
                     English name
      death_year_ah  equal to the death year or its alternative

    Hits are ordered by primary Arabic name. No criteria -> empty page.
    """
    if limit is None:
        limit = int(get_config().search["default_limit"])
    offset = max(0, offset)

    arabic_name = (arabic_name or "").strip()
    english_name = (english_name or "").strip()
    if not arabic_name and not english_name and death_year_ah is None:
        return SearchPage(limit=limit, offset=offset)

    arabic_needles: List[str] = []
    if arabic_name:
        arabic_needles = list(dict.fromkeys((arabic_name, normalize_arabic(arabic_name))))
    english_needle = english_name.lower()

    hits = sorted(
        (
            record
            for record in records
            if _matches_fields(record, arabic_needles, english_needle, death_year_ah)
        ),
        key=lambda r: r.primary_arabic_name,
    )
    page = hits[offset:offset + max(0, limit)]
    log.debug(
        "field lookup arabic=%r english=%r death=%r hits=%d",
        arabic_name, english_name, death_year_ah, len(hits),
    )

    return SearchPage(
        results=[SearchHit(record=r, score=0.0) for r in page],
        total=len(hits),
        limit=limit,
        offset=offset,
    )
