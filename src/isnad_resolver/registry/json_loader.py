"""
json_loader.py
Build a NarratorRegistry from a JSON export.

Accepted shapes:
    {"narrators": [ {...}, {...} ]}
    [ {...}, {...} ]

Keys may be snake_case (primary_arabic_name) or camelCase
(primaryArabicName) as produced by the web API.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from isnad_resolver.core.exceptions import RegistryError
from isnad_resolver.logging import get_logger
from isnad_resolver.registry.entities import AlternateName, NarratorRecord, NarratorRegistry

log = get_logger("json_loader")

_CAMEL_KEYS = {
    "primaryArabicName": "primary_arabic_name",
    "primaryEnglishName": "primary_english_name",
    "fullNameArabic": "full_name_arabic",
    "fullNameEnglish": "full_name_english",
    "searchText": "search_text",
    "taqribCategory": "taqrib_category",
    "ibnHajarRank": "ibn_hajar_rank",
    "dhahabiRank": "dhahabi_rank",
    "placeOfResidence": "place_of_residence",
    "deathYearAH": "death_year_ah",
    "deathYearAHAlternative": "death_year_ah_alternative",
    "deathYearCE": "death_year_ce",
    "placeOfDeath": "place_of_death",
    "alternateNames": "alternate_names",
    "arabicName": "arabic_name",
    "englishName": "english_name",
    "nameType": "name_type",
    "isPrimary": "is_primary",
}

_STRING_FIELDS = (
    "full_name_arabic",
    "full_name_english",
    "kunya",
    "title",
    "lineage",
    "search_text",
    "taqrib_category",
    "ibn_hajar_rank",
    "dhahabi_rank",
    "place_of_residence",
    "place_of_death",
    "notes",
)

_INT_FIELDS = ("death_year_ah", "death_year_ah_alternative", "death_year_ce")


def _snake(data: Dict[str, Any]) -> Dict[str, Any]:
    return {_CAMEL_KEYS.get(k, k): v for k, v in data.items()}


def _opt_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, list):
        # lineage is sometimes exported as a list of segments
        value = " ".join(str(v) for v in value if v)
    out = " ".join(str(value).split())
    return out or None


def _opt_int(value: Any) -> Optional[int]:
    if value in (None, ""):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _opt_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    return str(value).strip().lower() in {"1", "true", "yes", "y"}


def _alternate(entry: Any) -> Optional[AlternateName]:
    if isinstance(entry, str):
        return AlternateName(arabic_name=entry) if entry.strip() else None
    if not isinstance(entry, dict):
        return None
    entry = _snake(entry)
    return AlternateName(
        arabic_name=_opt_str(entry.get("arabic_name")) or "",
        english_name=_opt_str(entry.get("english_name")),
        name_type=entry.get("name_type") or "alternate",
        is_primary=_opt_bool(entry.get("is_primary")),
    )


def record_from_dict(data: Dict[str, Any]) -> NarratorRecord:
    if not isinstance(data, dict):
        raise RegistryError(f"Narrator entry must be an object, got {type(data).__name__}")
    data = _snake(data)

    narrator_id = _opt_str(data.get("id"))
    if not narrator_id:
        raise RegistryError("Narrator entry without id")

    alternates: List[AlternateName] = []
    for entry in data.get("alternate_names") or []:
        alt = _alternate(entry)
        if alt is not None:
            alternates.append(alt)

    kwargs: Dict[str, Any] = {f: _opt_str(data.get(f)) for f in _STRING_FIELDS}
    kwargs.update({f: _opt_int(data.get(f)) for f in _INT_FIELDS})

    return NarratorRecord(
        id=narrator_id,
        primary_arabic_name=_opt_str(data.get("primary_arabic_name")) or "",
        primary_english_name=_opt_str(data.get("primary_english_name")) or "",
        alternate_names=alternates,
        **kwargs,
    )


def registry_from_json(data: Any) -> NarratorRegistry:
    entries = data.get("narrators") if isinstance(data, dict) else data
    if not isinstance(entries, list):
        raise RegistryError("Narrator JSON must be a list or an object with a 'narrators' list")
    return NarratorRegistry.from_records(record_from_dict(e) for e in entries)


def load_registry_json(path: Union[str, Path]) -> NarratorRegistry:
    path = Path(path)
    log.debug("Loading narrator JSON: %s", path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError as exc:
        raise RegistryError(f"Narrator JSON not found: {path}") from exc
    except json.JSONDecodeError as exc:
        raise RegistryError(f"Invalid narrator JSON {path}: {exc}") from exc

    registry = registry_from_json(data)
    log.info("Loaded %d narrators from %s", len(registry), path)
    return registry
