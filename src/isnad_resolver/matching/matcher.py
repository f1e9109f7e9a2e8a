"""
matcher.py
Rank registry narrators against a free-text narrator name.

For every record:
  - Arabic-script query (in either argument): best similarity_arabic over
    primary name, full name, Arabic alternates and kunya.
  - English query (or a Latin-script query): best similarity_english over
    primary English name, full English name and English alternates.
  - Only a Latin query: similarity_arabic(query, primary Arabic name) scaled
    by the cross-script discount as a last resort.

Records below the confidence floor are dropped. Results are ordered by
confidence (desc) then primary Arabic name (asc).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from isnad_resolver.config import get_config
from isnad_resolver.logging import get_logger
from isnad_resolver.matching.similarity import similarity_arabic, similarity_english
from isnad_resolver.normalization.script import is_arabic_script
from isnad_resolver.registry.entities import NarratorRecord

log = get_logger("matcher")


@dataclass(frozen=True, slots=True)
class MatchSettings:
    confidence_floor: float = 0.3
    cross_script_discount: float = 0.7

    @classmethod
    def from_config(cls) -> "MatchSettings":
        matching = get_config().matching
        return cls(
            confidence_floor=float(matching["confidence_floor"]),
            cross_script_discount=float(matching["cross_script_discount"]),
        )


@dataclass(frozen=True, slots=True)
class MatchCandidate:
    narrator_id: str
    confidence: float
    matched_name: str
    matched_field: str
    record: NarratorRecord


def _clean_query(query: Optional[str]) -> str:
    return query.strip() if query else ""


def _best_field(
    query: str,
    fields: List[Tuple[str, str]],
    scorer,
) -> Tuple[float, str, str]:
    """(score, field, value) of the strictly best field; earlier fields win ties."""
    best_score, best_field, best_value = 0.0, "", ""
    for field_name, value in fields:
        score = scorer(query, value)
        if score > best_score:
            best_score, best_field, best_value = score, field_name, value
    return best_score, best_field, best_value


def score_record(
    record: NarratorRecord,
    arabic_query: str,
    english_queries: List[str],
    discount: float,
) -> Tuple[float, str, str]:
    best = (0.0, "primary_arabic_name", record.primary_arabic_name)

    if arabic_query:
        hit = _best_field(arabic_query, record.arabic_name_fields(), similarity_arabic)
        if hit[0] > best[0]:
            best = hit

    english_fields = record.english_name_fields()
    for query in english_queries:
        hit = _best_field(query, english_fields, similarity_english)
        if hit[0] > best[0]:
            best = hit

        if not arabic_query and record.primary_arabic_name:
            cross = similarity_arabic(query, record.primary_arabic_name) * discount
            if cross > best[0]:
                best = (cross, "primary_arabic_name", record.primary_arabic_name)

    return best


def find_matches(
    registry: Iterable[NarratorRecord],
    arabic_query: Optional[str] = None,
    english_query: Optional[str] = None,
    settings: Optional[MatchSettings] = None,
) -> List[MatchCandidate]:
    """
    Return candidates with confidence >= the floor, best first.

    An empty query (both arguments blank) returns an empty list.
    """
    settings = settings or MatchSettings.from_config()
    arabic_query = _clean_query(arabic_query)
    english_query = _clean_query(english_query)

    english_queries: List[str] = []
    if arabic_query and not is_arabic_script(arabic_query):
        # Latin text passed as the "Arabic" query is scored as English.
        english_queries.append(arabic_query)
        arabic_query = ""
    if english_query and not arabic_query and is_arabic_script(english_query):
        # Arabic text passed as the "English" query is scored as Arabic.
        arabic_query, english_query = english_query, ""
    if english_query and english_query not in english_queries:
        english_queries.append(english_query)

    if not arabic_query and not english_queries:
        return []

    matches: List[MatchCandidate] = []
    scanned = 0
    for record in registry:
        scanned += 1
        confidence, field_name, value = score_record(
            record, arabic_query, english_queries, settings.cross_script_discount
        )
        if confidence >= settings.confidence_floor:
            matches.append(MatchCandidate(
                narrator_id=record.id,
                confidence=confidence,
                matched_name=value,
                matched_field=field_name,
                record=record,
            ))

    matches.sort(key=lambda m: (-m.confidence, m.record.primary_arabic_name))
    log.debug(
        "find_matches arabic=%r english=%r scanned=%d matched=%d",
        arabic_query, english_query, scanned, len(matches),
    )
    return matches
