"""
script.py
Script detection for narrator names and search terms.
"""

from __future__ import annotations

import re
from typing import Optional

# Arabic, Arabic Supplement, Arabic Extended-A, Presentation Forms A and B.
_ARABIC_RE = re.compile(
    "[\u0600-\u06FF\u0750-\u077F\u08A0-\u08FF\uFB50-\uFDFF\uFE70-\uFEFF]"
)


def is_arabic_script(text: Optional[str]) -> bool:
    """True if ``text`` contains at least one Arabic-block code point."""
    if not text:
        return False
    return _ARABIC_RE.search(text) is not None
