from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Tuple

from isnad_resolver.core.exceptions import NarratorLookupError, RegistryError
from isnad_resolver.logging import get_logger

log = get_logger("registry")


# -----------------------------
# Base records (small atoms)
# -----------------------------

@dataclass(slots=True)
class AlternateName:
    """
    Row of ``narrator_names``: an extra spelling, nickname, kunya or title.
    """
    arabic_name: str = ""
    english_name: Optional[str] = None
    name_type: str = "alternate"
    is_primary: bool = False


@dataclass(slots=True)
class ScholarlyOpinion:
    scholar_name: str
    opinion_text: str
    opinion_type: str = "neutral"  # jarh | ta'dil | neutral
    source_reference: Optional[str] = None
    source_book: Optional[str] = None
    source_volume: Optional[str] = None
    is_primary: bool = False


@dataclass(slots=True)
class NarratorRelationship:
    related_narrator_id: str
    relationship_type: str  # teacher | student | companion | contemporary | companion_of
    relationship_description: Optional[str] = None
    duration_years: Optional[int] = None


@dataclass(slots=True)
class NarratorLineage:
    lineage_type: str  # tribal | geographical | honorific
    lineage_value: str


# -----------------------------
# Narrator
# -----------------------------

@dataclass(slots=True)
class NarratorRecord:
    id: str
    primary_arabic_name: str = ""
    primary_english_name: str = ""

    full_name_arabic: Optional[str] = None
    full_name_english: Optional[str] = None
    kunya: Optional[str] = None
    title: Optional[str] = None
    lineage: Optional[str] = None
    search_text: Optional[str] = None

    alternate_names: List[AlternateName] = field(default_factory=list)

    # Filter-only classification fields
    taqrib_category: Optional[str] = None
    ibn_hajar_rank: Optional[str] = None
    dhahabi_rank: Optional[str] = None
    place_of_residence: Optional[str] = None

    # Biography (display only)
    death_year_ah: Optional[int] = None
    death_year_ah_alternative: Optional[int] = None
    death_year_ce: Optional[int] = None
    place_of_death: Optional[str] = None
    notes: Optional[str] = None

    def arabic_name_fields(self) -> List[Tuple[str, str]]:
        """(field, value) pairs compared against an Arabic query, in match order."""
        fields: List[Tuple[str, str]] = []
        if self.primary_arabic_name:
            fields.append(("primary_arabic_name", self.primary_arabic_name))
        if self.full_name_arabic:
            fields.append(("full_name_arabic", self.full_name_arabic))
        for alt in self.alternate_names:
            if alt.arabic_name:
                fields.append(("alternate_name", alt.arabic_name))
        if self.kunya:
            fields.append(("kunya", self.kunya))
        return fields

    def english_name_fields(self) -> List[Tuple[str, str]]:
        fields: List[Tuple[str, str]] = []
        if self.primary_english_name:
            fields.append(("primary_english_name", self.primary_english_name))
        if self.full_name_english:
            fields.append(("full_name_english", self.full_name_english))
        for alt in self.alternate_names:
            if alt.english_name:
                fields.append(("alternate_name", alt.english_name))
        return fields

    def searchable_fields(self) -> List[str]:
        """Every free-text field the registry search prefilter looks at."""
        values = [
            self.primary_arabic_name,
            self.primary_english_name,
            self.full_name_arabic,
            self.full_name_english,
            self.title,
            self.kunya,
            self.lineage,
            self.search_text,
        ]
        for alt in self.alternate_names:
            values.append(alt.arabic_name)
            values.append(alt.english_name)
        return [v for v in values if v]

    def has_usable_name(self) -> bool:
        return bool(self.arabic_name_fields() or self.english_name_fields())

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "primary_arabic_name": self.primary_arabic_name,
            "primary_english_name": self.primary_english_name,
            "full_name_arabic": self.full_name_arabic,
            "full_name_english": self.full_name_english,
            "kunya": self.kunya,
            "title": self.title,
            "lineage": self.lineage,
            "taqrib_category": self.taqrib_category,
            "ibn_hajar_rank": self.ibn_hajar_rank,
            "dhahabi_rank": self.dhahabi_rank,
            "place_of_residence": self.place_of_residence,
            "death_year_ah": self.death_year_ah,
            "death_year_ah_alternative": self.death_year_ah_alternative,
            "alternate_names": [
                {"arabic_name": a.arabic_name, "english_name": a.english_name, "name_type": a.name_type}
                for a in self.alternate_names
            ],
        }


@dataclass(slots=True)
class NarratorDetail:
    """
    A record plus the biography tables fetched by id.
    """
    record: NarratorRecord
    scholarly_opinions: List[ScholarlyOpinion] = field(default_factory=list)
    relationships: List[NarratorRelationship] = field(default_factory=list)
    lineages: List[NarratorLineage] = field(default_factory=list)


# -----------------------------
# Registry
# -----------------------------

@dataclass(slots=True)
class NarratorRegistry:
    """
    In-memory narrator store indexed by narrator id.
    """
    narrators: Dict[str, NarratorRecord] = field(default_factory=dict)

    def register(self, record: NarratorRecord) -> None:
        if not record.id:
            raise RegistryError("Narrator record without id")
        if record.id in self.narrators:
            raise RegistryError(f"Duplicate narrator id: {record.id}")
        if not record.has_usable_name():
            log.debug("Narrator %s has no usable name field; it will never match", record.id)
        self.narrators[record.id] = record

    def get(self, narrator_id: str) -> Optional[NarratorRecord]:
        return self.narrators.get(narrator_id)

    def require(self, narrator_id: str) -> NarratorRecord:
        record = self.narrators.get(narrator_id)
        if record is None:
            raise NarratorLookupError(narrator_id)
        return record

    def __iter__(self) -> Iterator[NarratorRecord]:
        return iter(self.narrators.values())

    def __len__(self) -> int:
        return len(self.narrators)

    def __contains__(self, narrator_id: object) -> bool:
        return narrator_id in self.narrators

    @classmethod
    def from_records(cls, records) -> "NarratorRegistry":
        registry = cls()
        for record in records:
            registry.register(record)
        return registry
