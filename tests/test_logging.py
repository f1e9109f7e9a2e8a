# tests/test_logging.py

from __future__ import annotations

import logging

from isnad_resolver.config import load_config
from isnad_resolver.logging import LogSettings, get_logger


def test_short_names_become_children_of_the_base_logger():
    log = get_logger("matcher")

    assert log.name == "isnad_resolver.matcher"
    assert log.propagate is True
    # repeated calls do not stack module file handlers
    assert len(get_logger("matcher").handlers) == len(log.handlers)


def test_base_logger_owns_console_handler():
    base = get_logger()

    assert base.name == "isnad_resolver"
    assert base.propagate is False
    assert any(type(h) is logging.StreamHandler for h in base.handlers)
    assert get_logger("isnad_resolver") is base


def test_settings_follow_config(tmp_path, monkeypatch):
    path = tmp_path / "cfg.yml"
    path.write_text(
        "logging:\n  level: ERROR\n  to_file: false\n  dir: custom_logs\ndebug: false\n",
        encoding="utf-8",
    )
    monkeypatch.setattr("isnad_resolver.logging.logger.get_config", lambda: load_config(path))

    settings = LogSettings.from_config()

    assert settings.level == logging.ERROR
    assert settings.console_level == logging.WARNING
    assert settings.to_file is False
    assert settings.log_dir.name == "custom_logs"


def test_debug_flag_forces_debug_everywhere(tmp_path, monkeypatch):
    path = tmp_path / "cfg.yml"
    path.write_text("logging:\n  level: ERROR\ndebug: true\n", encoding="utf-8")
    monkeypatch.setattr("isnad_resolver.logging.logger.get_config", lambda: load_config(path))

    settings = LogSettings.from_config()

    assert settings.level == logging.DEBUG
    assert settings.console_level == logging.DEBUG
