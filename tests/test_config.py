# tests/test_config.py

from __future__ import annotations

import pytest

from isnad_resolver.config import (
    CONFIG_ENV_VAR,
    config_path,
    get_config,
    load_config,
    reset_config,
)
from isnad_resolver.core.exceptions import ConfigError


def test_repo_config_provides_matching_defaults():
    cfg = get_config()

    assert cfg.matching["confidence_floor"] == pytest.approx(0.3)
    assert cfg.matching["accept_threshold"] == pytest.approx(0.5)
    assert cfg.search["min_term_length"] == 2


def test_partial_sections_are_merged_with_defaults(tmp_path):
    path = tmp_path / "cfg.yml"
    path.write_text("matching:\n  confidence_floor: 0.5\n", encoding="utf-8")

    cfg = load_config(path)

    assert cfg.matching["confidence_floor"] == 0.5
    assert cfg.matching["cross_script_discount"] == pytest.approx(0.7)
    assert cfg.search["default_limit"] == 50
    assert cfg.debug is False


def test_missing_file_falls_back_to_defaults(tmp_path):
    cfg = load_config(tmp_path / "absent.yml")

    assert cfg.matching["accept_threshold"] == pytest.approx(0.5)
    assert cfg.logging["to_file"] is False


def test_malformed_yaml_raises(tmp_path):
    path = tmp_path / "bad.yml"
    path.write_text("matching: [unclosed\n", encoding="utf-8")

    with pytest.raises(ConfigError):
        load_config(path)


def test_non_mapping_yaml_raises(tmp_path):
    path = tmp_path / "list.yml"
    path.write_text("- a\n- b\n", encoding="utf-8")

    with pytest.raises(ConfigError):
        load_config(path)


def test_env_var_overrides_config_path(tmp_path, monkeypatch):
    path = tmp_path / "override.yml"
    path.write_text("search:\n  default_limit: 7\n", encoding="utf-8")
    monkeypatch.setenv(CONFIG_ENV_VAR, str(path))

    reset_config()
    try:
        assert config_path() == path
        assert get_config().search["default_limit"] == 7
    finally:
        monkeypatch.delenv(CONFIG_ENV_VAR)
        reset_config()
