"""
relevance.py
Relevance scoring for registry search.

Field priority: full Arabic name > kunya > primary Arabic name > lineage >
free text. Arabic fields are scored with similarity_arabic and banded:

    similarity    >=0.95   >=0.8   >=0.6   >=0.4   >0
    full name        100      80      60      40   20
    kunya             70      55      40      25   12
    primary name     100      80      50      30   15

Multi-term queries get a second pass with the joined phrase, and a record
whose kunya AND name both answer some term gets a flat compound bonus
(e.g. "ابو هريرة" -> kunya "ابو" + name "هريرة").
"""

from __future__ import annotations

from typing import Iterable, List, Optional, Sequence, Tuple

from isnad_resolver.matching.similarity import similarity_arabic
from isnad_resolver.normalization.script import is_arabic_script
from isnad_resolver.normalization.text import normalize_english, normalize_search_term
from isnad_resolver.registry.entities import NarratorRecord

TERM_BANDS = (0.95, 0.8, 0.6, 0.4)
FULL_NAME_POINTS = (100, 80, 60, 40, 20)
KUNYA_POINTS = (70, 55, 40, 25, 12)
PRIMARY_NAME_POINTS = (100, 80, 50, 30, 15)

PHRASE_BANDS = (0.8, 0.6)
PHRASE_FULL_NAME_POINTS = (25, 12)
PHRASE_KUNYA_POINTS = (40, 20)
PHRASE_PRIMARY_NAME_POINTS = (30, 15)

# (exact, word start, substring)
PRIMARY_ENGLISH_POINTS = (100, 50, 20)
FULL_ENGLISH_POINTS = (30, 30, 15)

TITLE_POINTS = 15
LINEAGE_POINTS = 35
SEARCH_TEXT_POINTS = 5

COMPOUND_THRESHOLD = 0.4
COMPOUND_BONUS = 50


def matches_search_term(normalized_field: str, normalized_term: str, is_arabic: bool) -> bool:
    """
    Word-boundary aware match: exact field, a word equal to or starting with
    the term, or (Arabic only) any substring.
    """
    if not normalized_term:
        return False
    if normalized_field == normalized_term:
        return True
    for word in normalized_field.split():
        if word.startswith(normalized_term):
            return True
    return is_arabic and normalized_term in normalized_field


def _banded(similarity: float, bands: Sequence[float], points: Sequence[int]) -> int:
    for threshold, award in zip(bands, points):
        if similarity >= threshold:
            return award
    # The term table carries one extra award for any positive similarity.
    if len(points) > len(bands) and similarity > 0:
        return points[len(bands)]
    return 0


def _field_similarity(field_value: Optional[str], term: str) -> float:
    if not field_value or not term:
        return 0.0
    return similarity_arabic(field_value, term)


def _english_points(field_value: Optional[str], term: str, points: Tuple[int, int, int]) -> int:
    normalized = normalize_english(field_value)
    if not normalized:
        return 0
    exact, word_start, substring = points
    if normalized == term:
        return exact
    if any(word.startswith(term) for word in normalized.split()):
        return word_start
    if term in normalized:
        return substring
    return 0


def _contains(field_value: Optional[str], term: str) -> bool:
    return bool(field_value) and term in normalize_search_term(field_value)


def relevance_score(
    record: NarratorRecord,
    normalized_terms: Sequence[str],
    original_terms: Sequence[str],
) -> float:
    score = 0
    kunya_hit = False
    name_hit = False

    for i, term in enumerate(normalized_terms):
        if not term:
            continue
        original = original_terms[i] if i < len(original_terms) else term

        full_sim = _field_similarity(record.full_name_arabic, term)
        kunya_sim = _field_similarity(record.kunya, term)
        primary_sim = _field_similarity(record.primary_arabic_name, term)

        score += _banded(full_sim, TERM_BANDS, FULL_NAME_POINTS)
        score += _banded(kunya_sim, TERM_BANDS, KUNYA_POINTS)
        score += _banded(primary_sim, TERM_BANDS, PRIMARY_NAME_POINTS)

        kunya_hit = kunya_hit or kunya_sim >= COMPOUND_THRESHOLD
        name_hit = name_hit or max(primary_sim, full_sim) >= COMPOUND_THRESHOLD

        if not is_arabic_script(original):
            score += _english_points(record.primary_english_name, term, PRIMARY_ENGLISH_POINTS)
            score += _english_points(record.full_name_english, term, FULL_ENGLISH_POINTS)

        if _contains(record.title, term):
            score += TITLE_POINTS
        if _contains(record.lineage, term):
            score += LINEAGE_POINTS
        if _contains(record.search_text, term):
            score += SEARCH_TEXT_POINTS

    phrase_terms = [t for t in normalized_terms if t]
    if len(phrase_terms) > 1:
        phrase = " ".join(phrase_terms)
        score += _banded(_field_similarity(record.primary_arabic_name, phrase), PHRASE_BANDS, PHRASE_PRIMARY_NAME_POINTS)
        score += _banded(_field_similarity(record.kunya, phrase), PHRASE_BANDS, PHRASE_KUNYA_POINTS)
        score += _banded(_field_similarity(record.full_name_arabic, phrase), PHRASE_BANDS, PHRASE_FULL_NAME_POINTS)

    if kunya_hit and name_hit:
        score += COMPOUND_BONUS

    return float(score)


def rank(
    records: Iterable[NarratorRecord],
    normalized_terms: Sequence[str],
    original_terms: Sequence[str],
) -> List[Tuple[NarratorRecord, float]]:
    """Score records and order them by score (desc) then primary Arabic name."""
    scored = [
        (record, relevance_score(record, normalized_terms, original_terms))
        for record in records
    ]
    scored.sort(key=lambda pair: (-pair[1], pair[0].primary_arabic_name))
    return scored
