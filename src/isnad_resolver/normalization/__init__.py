"""
isnad_resolver.normalization package

- script: Arabic/Latin script detection
- text:   Arabic and English name normalization
"""

from isnad_resolver.normalization.script import is_arabic_script
from isnad_resolver.normalization.text import (
    normalize_arabic,
    normalize_english,
    normalize_search_term,
)

__all__ = [
    "is_arabic_script",
    "normalize_arabic",
    "normalize_english",
    "normalize_search_term",
]
