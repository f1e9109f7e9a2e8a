"""
filters.py
Scholarly-classification filters applied before relevance scoring.

Groups are AND-combined; the accepted values inside a group are
OR-combined. A value may hold several alternatives separated by "|".
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterable, Optional, Tuple

from isnad_resolver.normalization.text import normalize_search_term
from isnad_resolver.registry.entities import NarratorRecord

# Reliability keys -> keywords looked for in the Ibn Hajar / Dhahabi ranks
RELIABILITY_KEYWORDS = MappingProxyType({
    "sahaba": ("صحابي", "صحبة"),
    "thiqah": ("ثقة",),
    "saduq": ("صدوق",),
    "daif": ("ضعيف",),
})


@dataclass(frozen=True, slots=True)
class SearchFilters:
    reliability: Tuple[str, ...] = ()
    generation: Tuple[str, ...] = ()
    residence: Tuple[str, ...] = ()

    @classmethod
    def build(
        cls,
        reliability: Optional[Iterable[str]] = None,
        generation: Optional[Iterable[str]] = None,
        residence: Optional[Iterable[str]] = None,
    ) -> "SearchFilters":
        return cls(
            reliability=tuple(v for v in (reliability or ()) if v),
            generation=tuple(v for v in (generation or ()) if v),
            residence=tuple(v for v in (residence or ()) if v),
        )

    def is_active(self) -> bool:
        return bool(self.reliability or self.generation or self.residence)


def _alternatives(value: str) -> Tuple[str, ...]:
    return tuple(
        normalize_search_term(part)
        for part in value.split("|")
        if part.strip()
    )


def _contains_any(haystack: Optional[str], needles: Iterable[str]) -> bool:
    text = normalize_search_term(haystack)
    if not text:
        return False
    return any(needle and needle in text for needle in needles)


def matches_reliability(record: NarratorRecord, keys: Iterable[str]) -> bool:
    combined = " ".join(r for r in (record.ibn_hajar_rank, record.dhahabi_rank) if r)
    for key in keys:
        # Unknown keys are treated as literal rank text
        keywords = RELIABILITY_KEYWORDS.get(key.lower()) or (key,)
        needles = [n for kw in keywords for n in _alternatives(kw)]
        if _contains_any(combined, needles):
            return True
    return False


def matches_substring_group(field_value: Optional[str], accepted: Iterable[str]) -> bool:
    return any(_contains_any(field_value, _alternatives(value)) for value in accepted)


def passes_filters(record: NarratorRecord, filters: Optional[SearchFilters]) -> bool:
    if filters is None or not filters.is_active():
        return True
    if filters.reliability and not matches_reliability(record, filters.reliability):
        return False
    if filters.generation and not matches_substring_group(record.taqrib_category, filters.generation):
        return False
    if filters.residence and not matches_substring_group(record.place_of_residence, filters.residence):
        return False
    return True
