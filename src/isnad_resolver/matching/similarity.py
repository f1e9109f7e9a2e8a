"""
similarity.py
Name similarity scoring in [0, 1].

similarity_english(a, b)
    exact -> 1.0, else max(word-set Jaccard, 0.9 * best word-prefix ratio)

similarity_arabic(a, b)
    exact -> 1.0
    substring (either way) -> min(0.95, shorter / longer)
    otherwise a weighted blend over decomposed name components:

        first_name 0.20 | father 0.35 | grandfather 0.25 | family 0.15 | other 0.05

    with two vetoes:
      - first names on both sides with word similarity < 0.8 -> 0.0
      - father names on both sides with word similarity < 0.7 -> score * 0.4
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Iterable, List, Optional

from isnad_resolver.names.decomposer import NameComponents, decompose_name
from isnad_resolver.normalization.text import normalize_arabic, normalize_english

SUBSTRING_CAP = 0.95
PREFIX_DISCOUNT = 0.9

COMPONENT_WEIGHTS = MappingProxyType({
    "first_name": 0.20,
    "father_name": 0.35,
    "grandfather_name": 0.25,
    "family_name": 0.15,
    "other_parts": 0.05,
})

# Share of a component's weight credited when only one side carries it.
ONE_SIDED_CREDIT = MappingProxyType({
    "first_name": 0.0,
    "father_name": 0.0,
    "grandfather_name": 0.05,
    "family_name": 0.03,
})

FIRST_NAME_GATE = 0.8
FATHER_PENALTY_THRESHOLD = 0.7
FATHER_PENALTY_FACTOR = 0.4


# ---------------------------------------------------------------------------
# Shared helpers
# ---------------------------------------------------------------------------

def _containment_ratio(a: str, b: str) -> Optional[float]:
    """shorter/longer when one string contains the other, else None."""
    if a in b or b in a:
        longer = max(len(a), len(b))
        return min(len(a), len(b)) / longer if longer else 0.0
    return None


def _jaccard(a: Iterable[str], b: Iterable[str]) -> float:
    set_a, set_b = set(a), set(b)
    union = set_a | set_b
    if not union:
        return 0.0
    return len(set_a & set_b) / len(union)


def word_similarity(word1: str, word2: str) -> float:
    """
    Single-token similarity: exact, containment ratio, or character-set
    Jaccard as a cheap typo-tolerant fallback.
    """
    if word1 == word2:
        return 1.0
    ratio = _containment_ratio(word1, word2)
    if ratio is not None:
        return ratio
    return _jaccard(word1, word2)


# ---------------------------------------------------------------------------
# English
# ---------------------------------------------------------------------------

def _best_prefix_ratio(words_a: List[str], words_b: List[str]) -> float:
    best = 0.0
    for wa in words_a:
        for wb in words_b:
            if wa.startswith(wb) or wb.startswith(wa):
                ratio = min(len(wa), len(wb)) / max(len(wa), len(wb))
                best = max(best, ratio)
    return best


def similarity_english(a: Optional[str], b: Optional[str]) -> float:
    norm_a = normalize_english(a)
    norm_b = normalize_english(b)
    if norm_a == norm_b:
        return 1.0

    words_a = norm_a.split()
    words_b = norm_b.split()
    if not words_a or not words_b:
        return 0.0

    jaccard = _jaccard(words_a, words_b)
    prefix = _best_prefix_ratio(words_a, words_b) * PREFIX_DISCOUNT
    return max(jaccard, prefix)


# ---------------------------------------------------------------------------
# Arabic
# ---------------------------------------------------------------------------

def _other_parts_similarity(parts_a: List[str], parts_b: List[str]) -> float:
    if not parts_a or not parts_b:
        return 0.0
    return max(word_similarity(pa, pb) for pa in parts_a for pb in parts_b)


def _component_blend(comp_a: NameComponents, comp_b: NameComponents) -> Optional[float]:
    """
    Weighted component similarity, or None when neither side produced any
    component to compare.
    """
    total_weight = 0.0
    matched_weight = 0.0

    for name in ("first_name", "father_name", "grandfather_name", "family_name"):
        value_a = getattr(comp_a, name)
        value_b = getattr(comp_b, name)
        if not (value_a or value_b):
            continue
        weight = COMPONENT_WEIGHTS[name]
        total_weight += weight
        if value_a and value_b:
            matched_weight += weight * word_similarity(value_a, value_b)
        else:
            matched_weight += weight * ONE_SIDED_CREDIT[name]

    if comp_a.other_parts or comp_b.other_parts:
        weight = COMPONENT_WEIGHTS["other_parts"]
        total_weight += weight
        matched_weight += weight * _other_parts_similarity(comp_a.other_parts, comp_b.other_parts)

    if total_weight == 0:
        return None
    return matched_weight / total_weight


def similarity_arabic(a: Optional[str], b: Optional[str]) -> float:
    norm_a = normalize_arabic(a)
    norm_b = normalize_arabic(b)

    if norm_a == norm_b:
        return 1.0

    ratio = _containment_ratio(norm_a, norm_b)
    if ratio is not None:
        return min(SUBSTRING_CAP, ratio)

    comp_a = decompose_name(norm_a)
    comp_b = decompose_name(norm_b)

    if comp_a.first_name and comp_b.first_name:
        if word_similarity(comp_a.first_name, comp_b.first_name) < FIRST_NAME_GATE:
            return 0.0

    blended = _component_blend(comp_a, comp_b)
    if blended is None:
        words_a = [w for w in norm_a.split() if len(w) > 1]
        words_b = [w for w in norm_b.split() if len(w) > 1]
        if not words_a or not words_b:
            return 0.0
        return _jaccard(words_a, words_b)

    if comp_a.father_name and comp_b.father_name:
        if word_similarity(comp_a.father_name, comp_b.father_name) < FATHER_PENALTY_THRESHOLD:
            blended *= FATHER_PENALTY_FACTOR

    return min(1.0, blended)
