class ResolverError(Exception):
    """Base exception for isnad_resolver failures."""


class ConfigError(ResolverError):
    """Raised when the configuration file cannot be used."""


class RegistryError(ResolverError):
    """Raised when the narrator registry cannot be read or is inconsistent."""


class NarratorLookupError(RegistryError):
    """Raised when a narrator id has no record in the registry."""

    def __init__(self, narrator_id: str, message: str | None = None):
        self.narrator_id = narrator_id
        super().__init__(message or f"Narrator not found: {narrator_id}")


class SearchQueryError(ResolverError):
    """Raised when a search query has no usable terms."""
