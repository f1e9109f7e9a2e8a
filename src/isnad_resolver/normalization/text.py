"""
text.py
Canonical comparison forms for Arabic and English narrator names.

normalize_arabic:
  - strips harakat (short-vowel marks, shadda, sukun, dagger alef) and tatweel
  - folds alef variants (hamza above/below, madda, wasla) to bare alef
  - folds alef maksura to ya and teh marbuta to heh
  - rewrites the possessive kunya token ابي to ابو (ابي هريرة == ابو هريرة)
  - collapses whitespace, trims, lowercases

normalize_english:
  - collapses whitespace, trims, lowercases

Both are idempotent and never raise; None/empty input yields "".
"""

from __future__ import annotations

import re
from typing import Optional

from isnad_resolver.normalization.script import is_arabic_script

# Fathatan..wavy hamza below, dagger alef, tatweel
_HARAKAT_RE = re.compile("[\u064B-\u065F\u0670\u0640]")

_LETTER_FOLDS = str.maketrans({
    "\u0623": "\u0627",  # alef with hamza above
    "\u0625": "\u0627",  # alef with hamza below
    "\u0622": "\u0627",  # alef with madda
    "\u0671": "\u0627",  # alef wasla
    "\u0649": "\u064A",  # alef maksura -> ya
    "\u0629": "\u0647",  # teh marbuta -> heh
})

KUNYA_POSSESSIVE = "ابي"
KUNYA_NOMINATIVE = "ابو"


def normalize_arabic(text: Optional[str]) -> str:
    if not text:
        return ""

    result = _HARAKAT_RE.sub("", text)
    result = result.translate(_LETTER_FOLDS)

    # split() also collapses whitespace runs and trims
    tokens = [
        KUNYA_NOMINATIVE if tok == KUNYA_POSSESSIVE else tok
        for tok in result.split()
    ]
    return " ".join(tokens).lower()


def normalize_english(text: Optional[str]) -> str:
    if not text:
        return ""
    return " ".join(text.split()).lower()


def normalize_search_term(text: Optional[str]) -> str:
    """Normalize with the Arabic or English rules depending on the script."""
    if is_arabic_script(text):
        return normalize_arabic(text)
    return normalize_english(text)
