import sys
from pathlib import Path

import pytest

# Ensure the project src directory is on sys.path for test imports
PROJECT_ROOT = Path(__file__).resolve().parent.parent
SRC_PATH = PROJECT_ROOT / "src"
if SRC_PATH not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

from isnad_resolver.registry.entities import (  # noqa: E402
    AlternateName,
    NarratorRecord,
    NarratorRegistry,
)


@pytest.fixture
def narrator_records():
    """
    Small registry of companions and early authorities used across tests.
    """
    return [
        NarratorRecord(
            id="abu-hurayra",
            primary_arabic_name="أبو هريرة",
            primary_english_name="Abu Hurayra",
            full_name_arabic="عبد الرحمن بن صخر الدوسي",
            kunya="أبو هريرة",
            lineage="الدوسي",
            taqrib_category="الطبقة الأولى",
            dhahabi_rank="صحابي",
            place_of_residence="المدينة",
        ),
        NarratorRecord(
            id="ibn-umar",
            primary_arabic_name="عبد الله بن عمر",
            primary_english_name="Abdullah ibn Umar",
            full_name_arabic="عبد الله بن عمر بن الخطاب",
            kunya="أبو عبد الرحمن",
            dhahabi_rank="صحابي",
            place_of_residence="المدينة",
        ),
        NarratorRecord(
            id="ibn-amr",
            primary_arabic_name="عبد الله بن عمرو",
            primary_english_name="Abdullah ibn Amr",
            full_name_arabic="عبد الله بن عمرو بن العاص",
            dhahabi_rank="صحابي",
            place_of_residence="مكة",
        ),
        NarratorRecord(
            id="malik",
            primary_arabic_name="مالك بن أنس",
            primary_english_name="Malik ibn Anas",
            kunya="أبو عبد الله",
            taqrib_category="الطبقة السابعة",
            ibn_hajar_rank="إمام دار الهجرة ثقة ثبت",
            place_of_residence="المدينة",
            alternate_names=[
                AlternateName(arabic_name="مالك بن أنس الأصبحي", english_name="Imam Malik"),
            ],
        ),
        NarratorRecord(
            id="umar",
            primary_arabic_name="عمر بن الخطاب",
            primary_english_name="Umar ibn al-Khattab",
            kunya="أبو حفص",
            dhahabi_rank="صحابي",
            place_of_residence="المدينة",
        ),
    ]


@pytest.fixture
def registry(narrator_records):
    return NarratorRegistry.from_records(narrator_records)
