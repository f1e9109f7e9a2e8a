# tests/test_chain_resolution.py

from __future__ import annotations

import pytest

from isnad_resolver.core.exceptions import NarratorLookupError
from isnad_resolver.matching import MatchSettings
from isnad_resolver.matching.chain import ExtractedNarrator, is_non_narrator, resolve_chain
from isnad_resolver.registry.entities import NarratorDetail

SETTINGS = MatchSettings(confidence_floor=0.3, cross_script_discount=0.7)


def _chain(*names):
    return [ExtractedNarrator(number=i, arabic_name=name) for i, name in enumerate(names, start=1)]


def test_prophet_reference_is_skipped_and_narrators_matched(registry):
    narrators = _chain("رَسُولَ اللَّهِ", "أبي هريرة", "سفيان الثوري")

    resolution = resolve_chain(registry, narrators, settings=SETTINGS, accept_threshold=0.5)
    prophet, abu_hurayra, sufyan = resolution.results

    assert prophet.skipped and not prophet.matched
    assert prophet.match is None

    assert abu_hurayra.matched
    assert abu_hurayra.match.narrator_id == "abu-hurayra"

    assert not sufyan.matched and not sufyan.skipped

    assert resolution.matched == 1
    assert resolution.unmatched == 2


def test_best_candidate_below_threshold_is_not_accepted(registry):
    narrators = _chain("مالك")

    rejected = resolve_chain(registry, narrators, settings=SETTINGS, accept_threshold=0.5)
    accepted = resolve_chain(registry, narrators, settings=SETTINGS, accept_threshold=0.3)

    assert not rejected.results[0].matched
    assert accepted.results[0].matched
    assert accepted.results[0].match.narrator_id == "malik"


def test_default_threshold_comes_from_config(registry):
    resolution = resolve_chain(registry, _chain("مالك", "عبد الله بن عمر"))

    assert [r.matched for r in resolution.results] == [False, True]


def test_detail_lookup_hydrates_accepted_matches(registry):
    seen = []

    def lookup(narrator_id):
        seen.append(narrator_id)
        return NarratorDetail(record=registry.require(narrator_id))

    resolution = resolve_chain(
        registry,
        _chain("النبي", "عبد الله بن عمر"),
        settings=SETTINGS,
        accept_threshold=0.5,
        detail_lookup=lookup,
    )

    assert seen == ["ibn-umar"]
    assert resolution.results[1].detail.record.id == "ibn-umar"
    assert resolution.results[0].detail is None


def test_detail_lookup_failure_propagates(registry):
    def lookup(narrator_id):
        raise NarratorLookupError(narrator_id)

    with pytest.raises(NarratorLookupError) as excinfo:
        resolve_chain(registry, _chain("أبو هريرة"), settings=SETTINGS, detail_lookup=lookup)

    assert excinfo.value.narrator_id == "abu-hurayra"


def test_non_narrator_names():
    assert is_non_narrator("رسول الله صلى الله عليه وسلم")
    assert is_non_narrator("النَّبِيِّ")
    assert is_non_narrator("الْإِمَامُ الْبُخَارِيُّ")
    assert not is_non_narrator("عبد الله")
    assert not is_non_narrator("أبو هريرة")


def test_extracted_narrator_accepts_camel_case_keys():
    narrator = ExtractedNarrator.from_dict({"number": "3", "arabicName": "أبي هريرة", "englishName": "Abu Hurayra"})

    assert narrator.number == 3
    assert narrator.arabic_name == "أبي هريرة"
    assert narrator.english_name == "Abu Hurayra"


def test_resolution_to_dict(registry):
    resolution = resolve_chain(registry, _chain("رسول الله", "أبو هريرة"), settings=SETTINGS, accept_threshold=0.5)
    data = resolution.to_dict()

    assert data["summary"] == {"total": 2, "matched": 1, "unmatched": 1}
    assert data["matches"][0]["matched"] is False
    assert data["matches"][1]["narrator_id"] == "abu-hurayra"
    assert data["matches"][1]["confidence"] == 1.0
