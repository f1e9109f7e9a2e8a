# tests/test_decomposer.py

from __future__ import annotations

from isnad_resolver.names import NameComponents, decompose_name


def test_father_and_grandfather_chain():
    comp = decompose_name("عبد الله بن عمر بن الخطاب")

    assert comp.first_name == "عبد الله"
    assert comp.father_name == "عمر"
    assert comp.grandfather_name == "الخطاب"
    assert comp.family_name is None
    assert comp.other_parts == []


def test_single_patronymic():
    comp = decompose_name("مالك بن أنس")

    assert comp.first_name == "مالك"
    assert comp.father_name == "انس"
    assert comp.grandfather_name is None


def test_kunya_prefix_makes_next_token_the_first_name():
    comp = decompose_name("أبو إسحاق السبيعي")

    assert comp.first_name == "اسحاق"
    assert comp.family_name == "السبيعي"
    assert comp.father_name is None


def test_no_particle_keeps_whole_name_as_first_name():
    comp = decompose_name("سفيان الثوري")

    assert comp.first_name == "سفيان الثوري"
    assert comp.family_name is None


def test_long_chain_spills_into_other_parts():
    comp = decompose_name("محمد بن إسماعيل بن إبراهيم بن المغيرة البخاري")

    assert comp.first_name == "محمد"
    assert comp.father_name == "اسماعيل"
    assert comp.grandfather_name == "ابراهيم"
    assert comp.other_parts == ["المغيره"]
    assert comp.family_name == "البخاري"


def test_only_one_family_name_is_kept():
    comp = decompose_name("سليمان بن مهران الأعمش الكوفي")

    assert comp.father_name == "مهران"
    assert comp.family_name == "الاعمش"
    assert comp.other_parts == ["الكوفي"]


def test_trailing_token_without_grandfather_becomes_family_name():
    comp = decompose_name("حماد بن زيد درهم")

    assert comp.father_name == "زيد"
    assert comp.family_name == "درهم"


def test_diacritized_input_is_normalized_first():
    comp = decompose_name("عَبْدُ اللَّهِ بْنُ عُمَرَ")

    assert comp.first_name == "عبد الله"
    assert comp.father_name == "عمر"


def test_empty_and_single_letter_input_yield_empty_components():
    assert decompose_name("").is_empty()
    assert decompose_name(None).is_empty()
    # single-character tokens are dropped
    assert decompose_name("ع").is_empty()


def test_to_dict_shape():
    comp = NameComponents(first_name="عمر", father_name="الخطاب")

    assert comp.to_dict() == {
        "first_name": "عمر",
        "father_name": "الخطاب",
        "grandfather_name": None,
        "family_name": None,
        "other_parts": [],
    }
