# tests/test_cli.py

from __future__ import annotations

import json

import pytest
from typer.testing import CliRunner

from isnad_resolver.cli.app import app
from isnad_resolver.registry.sqlite_store import SqliteNarratorStore

runner = CliRunner()


@pytest.fixture
def registry_json(tmp_path, narrator_records):
    path = tmp_path / "narrators.json"
    path.write_text(
        json.dumps({"narrators": [r.to_dict() for r in narrator_records]}, ensure_ascii=False),
        encoding="utf-8",
    )
    return path


@pytest.fixture
def registry_db(tmp_path, narrator_records):
    path = tmp_path / "narrators.db"
    with SqliteNarratorStore(path, create=True) as store:
        store.initialize_schema()
        for rec in narrator_records:
            store.add_narrator(rec)
    return path


@pytest.fixture
def chain_file(tmp_path):
    path = tmp_path / "chain.json"
    path.write_text(
        json.dumps(
            [
                {"number": 1, "arabicName": "رسول الله"},
                {"number": 2, "arabicName": "أبي هريرة"},
                {"number": 3, "arabicName": "سفيان الثوري"},
            ],
            ensure_ascii=False,
        ),
        encoding="utf-8",
    )
    return path


def test_match_json_output(registry_json):
    result = runner.invoke(app, ["match", "أبو هريرة", "--registry", str(registry_json), "--json"])

    assert result.exit_code == 0, result.output
    payload = json.loads(result.stdout)
    assert payload["matches"][0]["narrator_id"] == "abu-hurayra"
    assert payload["matches"][0]["confidence"] == 1.0


def test_match_reads_sqlite_registry(registry_db):
    result = runner.invoke(app, ["match", "Malik ibn Anas", "--registry", str(registry_db), "--json"])

    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout)["matches"][0]["narrator_id"] == "malik"


def test_match_table_output(registry_json):
    result = runner.invoke(app, ["match", "عبد الله بن عمر", "--registry", str(registry_json)])

    assert result.exit_code == 0, result.output
    assert "Matches" in result.output


def test_search_json_output(registry_json):
    result = runner.invoke(
        app,
        ["search", "ibn", "--registry", str(registry_json), "--limit", "2", "--json"],
    )

    assert result.exit_code == 0, result.output
    payload = json.loads(result.stdout)
    assert payload["total"] == 4
    assert payload["count"] == 2


def test_search_with_reliability_filter(registry_json):
    result = runner.invoke(
        app,
        ["search", "ibn", "--registry", str(registry_json), "--reliability", "thiqah", "--json"],
    )

    assert result.exit_code == 0, result.output
    assert [n["id"] for n in json.loads(result.stdout)["narrators"]] == ["malik"]


def test_search_rejects_too_short_query(registry_json):
    result = runner.invoke(app, ["search", "a", "--registry", str(registry_json)])

    assert result.exit_code == 1
    assert "Error" in result.output


def test_resolve_chain_json(registry_json, chain_file):
    result = runner.invoke(app, ["resolve", str(chain_file), "--registry", str(registry_json), "--json"])

    assert result.exit_code == 0, result.output
    payload = json.loads(result.stdout)
    assert payload["summary"] == {"total": 3, "matched": 1, "unmatched": 2}
    assert payload["matches"][1]["narrator_id"] == "abu-hurayra"


def test_resolve_with_details_from_sqlite(registry_db, chain_file):
    result = runner.invoke(
        app,
        ["resolve", str(chain_file), "--registry", str(registry_db), "--details", "--json"],
    )

    assert result.exit_code == 0, result.output
    payload = json.loads(result.stdout)
    assert payload["matches"][1]["scholarly_opinions_count"] == 0


def test_resolve_details_need_sqlite(registry_json, chain_file):
    result = runner.invoke(
        app,
        ["resolve", str(chain_file), "--registry", str(registry_json), "--details"],
    )

    assert result.exit_code == 1


def test_stats(registry_json):
    result = runner.invoke(app, ["stats", "--registry", str(registry_json)])

    assert result.exit_code == 0, result.output
    assert "Narrators" in result.output
    assert "5" in result.output


def test_missing_registry_exits_with_error(tmp_path):
    result = runner.invoke(app, ["stats", "--registry", str(tmp_path / "nope.json")])

    assert result.exit_code == 1
    assert "Error" in result.output


def test_resolve_rejects_chain_of_bare_strings(tmp_path, registry_json):
    chain = tmp_path / "strings.json"
    chain.write_text(json.dumps(["أبو هريرة"], ensure_ascii=False), encoding="utf-8")

    result = runner.invoke(app, ["resolve", str(chain), "--registry", str(registry_json)])

    assert result.exit_code == 1
    assert "invalid chain file" in result.output
    assert result.exception is None or isinstance(result.exception, SystemExit)


def test_lookup_by_english_name(registry_json):
    result = runner.invoke(
        app,
        ["lookup", "--english", "ibn umar", "--registry", str(registry_json), "--json"],
    )

    assert result.exit_code == 0, result.output
    payload = json.loads(result.stdout)
    assert payload["total"] == 1
    assert payload["narrators"][0]["id"] == "ibn-umar"


def test_lookup_table_output(registry_json):
    result = runner.invoke(app, ["lookup", "--arabic", "عبد الله", "--registry", str(registry_json)])

    assert result.exit_code == 0, result.output
    assert "Lookup (2 found)" in result.output


def test_lookup_without_criteria_exits_with_error(registry_json):
    result = runner.invoke(app, ["lookup", "--registry", str(registry_json)])

    assert result.exit_code == 1
    assert "at least one" in result.output
