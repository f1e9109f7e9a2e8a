"""
Logging setup shared by every isnad_resolver module.

``get_logger("matcher")`` returns ``isnad_resolver.matcher``, a child of the
``isnad_resolver`` base logger. The base logger writes to the console and,
when ``logging.to_file`` is on, to ``logs/isnad_resolver.log``; each child
also keeps its own ``logs/isnad_resolver_<module>.log``.

Console output stays at WARNING unless ``debug: true`` so CLI tables and
JSON are not interleaved with progress messages.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from logging import Logger
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from isnad_resolver.config import get_config

PROJECT_ROOT = Path(__file__).resolve().parents[3]
BASE_LOGGER_NAME = "isnad_resolver"

_FORMATTER = logging.Formatter(
    "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
_ROTATE_BYTES = 5 * 1024 * 1024
_ROTATE_BACKUPS = 5


@dataclass(frozen=True, slots=True)
class LogSettings:
    level: int
    console_level: int
    to_file: bool
    rotate: bool
    log_dir: Path
    master_file: str

    @classmethod
    def from_config(cls) -> "LogSettings":
        cfg = get_config()
        section = cfg.logging
        debug = bool(cfg.debug)

        level = getattr(logging, str(section.get("level", "INFO")).upper(), logging.INFO)
        log_dir = Path(section.get("dir") or cfg.paths.get("logs_dir") or "logs")
        if not log_dir.is_absolute():
            log_dir = PROJECT_ROOT / log_dir

        return cls(
            level=logging.DEBUG if debug else level,
            console_level=logging.DEBUG if debug else logging.WARNING,
            to_file=bool(section.get("to_file", True)),
            rotate=bool(section.get("rotate", False)),
            log_dir=log_dir,
            master_file=section.get("file", "isnad_resolver.log"),
        )


_settings: Optional[LogSettings] = None


def _file_handler(settings: LogSettings, filename: str) -> logging.Handler:
    settings.log_dir.mkdir(parents=True, exist_ok=True)
    path = settings.log_dir / filename
    if settings.rotate:
        handler: logging.Handler = RotatingFileHandler(
            path, maxBytes=_ROTATE_BYTES, backupCount=_ROTATE_BACKUPS, encoding="utf-8"
        )
    else:
        handler = logging.FileHandler(path, encoding="utf-8")
    handler.setLevel(settings.level)
    handler.setFormatter(_FORMATTER)
    return handler


def _base_logger() -> Logger:
    """Attach console and master-file handlers the first time through."""
    global _settings

    base = logging.getLogger(BASE_LOGGER_NAME)
    if _settings is not None:
        return base

    _settings = LogSettings.from_config()
    base.setLevel(_settings.level)
    base.propagate = False

    console = logging.StreamHandler()
    console.setLevel(_settings.console_level)
    console.setFormatter(_FORMATTER)
    base.addHandler(console)

    if _settings.to_file:
        base.addHandler(_file_handler(_settings, _settings.master_file))
    return base


def _qualified_name(name: str) -> str:
    if name == BASE_LOGGER_NAME or name.startswith(BASE_LOGGER_NAME + "."):
        return name
    return f"{BASE_LOGGER_NAME}.{name}"


def get_logger(name: str | None = None) -> Logger:
    """
    Return the project logger for ``name`` (a short module name or a fully
    qualified ``isnad_resolver.*`` name). Calling it twice is safe.
    """
    base = _base_logger()
    assert _settings is not None

    qualified = _qualified_name(name or BASE_LOGGER_NAME)
    if qualified == BASE_LOGGER_NAME:
        return base

    logger = logging.getLogger(qualified)
    logger.setLevel(_settings.level)
    logger.propagate = True

    if _settings.to_file and not any(getattr(h, "module_file", False) for h in logger.handlers):
        handler = _file_handler(_settings, qualified.replace(".", "_") + ".log")
        handler.module_file = True  # type: ignore[attr-defined]
        logger.addHandler(handler)
    return logger
