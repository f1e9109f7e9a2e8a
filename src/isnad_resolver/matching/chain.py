"""
chain.py
Resolve every narrator extracted from an isnad against the registry.

The best candidate is accepted only above the accept threshold. References
that are not narrators (the Prophet, the compiler of the collection) are
passed through unmatched.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, List, Optional

from isnad_resolver.config import get_config
from isnad_resolver.logging import get_logger
from isnad_resolver.matching.matcher import MatchCandidate, MatchSettings, find_matches
from isnad_resolver.normalization.text import normalize_arabic
from isnad_resolver.registry.entities import NarratorDetail, NarratorRecord

log = get_logger("chain")

NON_NARRATOR_NAMES = frozenset(
    normalize_arabic(name)
    for name in (
        "رسول الله",
        "النبي",
        "الإمام البخاري",
    )
)
PROPHET_MARKERS = ("رسول", "الله")


@dataclass(slots=True)
class ExtractedNarrator:
    number: int
    arabic_name: str
    english_name: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ExtractedNarrator":
        return cls(
            number=int(data.get("number", 0)),
            arabic_name=str(data.get("arabic_name") or data.get("arabicName") or ""),
            english_name=str(data.get("english_name") or data.get("englishName") or ""),
        )


@dataclass(slots=True)
class NarratorMatchResult:
    narrator: ExtractedNarrator
    matched: bool = False
    skipped: bool = False
    match: Optional[MatchCandidate] = None
    detail: Optional[NarratorDetail] = None

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "number": self.narrator.number,
            "arabic_name": self.narrator.arabic_name,
            "english_name": self.narrator.english_name,
            "matched": self.matched,
        }
        if self.match is not None and self.matched:
            out.update({
                "narrator_id": self.match.narrator_id,
                "confidence": self.match.confidence,
                "matched_name": self.match.matched_name,
                "primary_arabic_name": self.match.record.primary_arabic_name,
                "primary_english_name": self.match.record.primary_english_name,
            })
        if self.detail is not None:
            out["scholarly_opinions_count"] = len(self.detail.scholarly_opinions)
        return out


@dataclass(slots=True)
class ChainResolution:
    results: List[NarratorMatchResult] = field(default_factory=list)

    @property
    def matched(self) -> int:
        return sum(1 for r in self.results if r.matched)

    @property
    def unmatched(self) -> int:
        return len(self.results) - self.matched

    def to_dict(self) -> Dict[str, Any]:
        return {
            "matches": [r.to_dict() for r in self.results],
            "summary": {
                "total": len(self.results),
                "matched": self.matched,
                "unmatched": self.unmatched,
            },
        }


def is_non_narrator(arabic_name: str) -> bool:
    normalized = normalize_arabic(arabic_name)
    if normalized in NON_NARRATOR_NAMES:
        return True
    return all(marker in normalized for marker in PROPHET_MARKERS)


def resolve_chain(
    registry: Iterable[NarratorRecord],
    narrators: Iterable[ExtractedNarrator],
    settings: Optional[MatchSettings] = None,
    accept_threshold: Optional[float] = None,
    detail_lookup: Optional[Callable[[str], NarratorDetail]] = None,
) -> ChainResolution:
    """
    Match each extracted narrator; ``detail_lookup`` (if given) hydrates
    accepted matches and may raise NarratorLookupError.
    """
    settings = settings or MatchSettings.from_config()
    if accept_threshold is None:
        accept_threshold = float(get_config().matching["accept_threshold"])

    records = list(registry)
    resolution = ChainResolution()

    for narrator in narrators:
        result = NarratorMatchResult(narrator=narrator)
        resolution.results.append(result)

        if is_non_narrator(narrator.arabic_name):
            result.skipped = True
            continue

        candidates = find_matches(
            records,
            arabic_query=narrator.arabic_name,
            english_query=narrator.english_name or None,
            settings=settings,
        )
        if not candidates or candidates[0].confidence < accept_threshold:
            continue

        result.matched = True
        result.match = candidates[0]
        if detail_lookup is not None:
            result.detail = detail_lookup(result.match.narrator_id)

    log.info(
        "Chain resolved: total=%d matched=%d unmatched=%d",
        len(resolution.results), resolution.matched, resolution.unmatched,
    )
    return resolution
