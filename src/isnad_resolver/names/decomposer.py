"""
decomposer.py
Structured decomposition of Arabic patronymic names.

    "عبد الله بن عمر بن الخطاب"
        first_name       = "عبد الله"
        father_name      = "عمر"
        grandfather_name = "الخطاب"

    "أبو إسحاق السبيعي"
        first_name       = "اسحاق"   (token after the kunya prefix)
        family_name      = "السبيعي"

Grammar:
  - A leading kunya prefix ("father of" / "mother of") makes the next token
    the first name.
  - Otherwise everything before the first relationship particle ("son of")
    is the first name.
  - particle + token pairs fill father, then grandfather; later pairs go to
    other_parts.
  - Remaining tokens starting with the definite article (or a trailing token
    when no grandfather was found) become the family name; only one is kept.

Parsing is total: malformed input yields partially filled components.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from isnad_resolver.normalization.text import normalize_arabic

# Post-normalization forms (hamza variants are already folded to bare alef).
RELATIONSHIP_PARTICLES = frozenset({"ابن", "بن", "اب"})
KUNYA_PREFIXES = frozenset({"ابو", "ام"})
DEFINITE_ARTICLE = "ال"


@dataclass(slots=True)
class NameComponents:
    first_name: str = ""
    father_name: Optional[str] = None
    grandfather_name: Optional[str] = None
    family_name: Optional[str] = None
    other_parts: List[str] = field(default_factory=list)

    def is_empty(self) -> bool:
        return not (
            self.first_name
            or self.father_name
            or self.grandfather_name
            or self.family_name
            or self.other_parts
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "first_name": self.first_name,
            "father_name": self.father_name,
            "grandfather_name": self.grandfather_name,
            "family_name": self.family_name,
            "other_parts": list(self.other_parts),
        }


def _tokens(arabic_name: Optional[str]) -> List[str]:
    return [w for w in normalize_arabic(arabic_name).split(" ") if len(w) > 1]


def _split_first_name(words: List[str]) -> tuple[str, int]:
    """
    Return (first_name, index of the first token after it).
    """
    if len(words) > 1 and words[0] in KUNYA_PREFIXES:
        return words[1], 2

    end = len(words)
    for i, word in enumerate(words):
        if word in RELATIONSHIP_PARTICLES:
            end = i
            break
    return " ".join(words[:end]), end


def decompose_name(arabic_name: Optional[str]) -> NameComponents:
    words = _tokens(arabic_name)
    if not words:
        return NameComponents()

    first_name, i = _split_first_name(words)
    comp = NameComponents(first_name=first_name)

    while i < len(words):
        word = words[i]

        if word in RELATIONSHIP_PARTICLES:
            i += 1
            if i >= len(words):
                break
            # "X ibn Y ibn Z": father and grandfather in one step
            if (
                comp.father_name is None
                and i + 1 < len(words)
                and words[i + 1] in RELATIONSHIP_PARTICLES
            ):
                comp.father_name = words[i]
                i += 2
                if i < len(words):
                    comp.grandfather_name = words[i]
                    i += 1
            else:
                if comp.father_name is None:
                    comp.father_name = words[i]
                elif comp.grandfather_name is None:
                    comp.grandfather_name = words[i]
                else:
                    comp.other_parts.append(words[i])
                i += 1
            continue

        is_last = i == len(words) - 1
        if word.startswith(DEFINITE_ARTICLE) or (is_last and comp.grandfather_name is None):
            if comp.family_name is None:
                comp.family_name = word
            else:
                comp.other_parts.append(word)
        else:
            comp.other_parts.append(word)
        i += 1

    return comp
