from isnad_resolver.core.exceptions import (
    ConfigError,
    NarratorLookupError,
    RegistryError,
    ResolverError,
    SearchQueryError,
)

__all__ = [
    "ConfigError",
    "NarratorLookupError",
    "RegistryError",
    "ResolverError",
    "SearchQueryError",
]
