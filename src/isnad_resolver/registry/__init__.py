"""
Narrator registry: entities, SQLite store and JSON loader.
"""

from isnad_resolver.registry.entities import (
    AlternateName,
    NarratorDetail,
    NarratorLineage,
    NarratorRecord,
    NarratorRegistry,
    NarratorRelationship,
    ScholarlyOpinion,
)
from isnad_resolver.registry.json_loader import load_registry_json, registry_from_json
from isnad_resolver.registry.sqlite_store import SqliteNarratorStore

__all__ = [
    "AlternateName",
    "NarratorDetail",
    "NarratorLineage",
    "NarratorRecord",
    "NarratorRegistry",
    "NarratorRelationship",
    "ScholarlyOpinion",
    "SqliteNarratorStore",
    "load_registry_json",
    "registry_from_json",
]
