import os
from pathlib import Path

import yaml

from isnad_resolver.core.exceptions import ConfigError

CONFIG_PATH = Path(__file__).resolve().parents[2] / "config" / "isnad_resolver.yml"
CONFIG_ENV_VAR = "ISNAD_RESOLVER_CONFIG"

DEFAULT_MATCHING = {
    "confidence_floor": 0.3,
    "cross_script_discount": 0.7,
    "accept_threshold": 0.5,
}

DEFAULT_SEARCH = {
    "min_term_length": 2,
    "default_limit": 50,
}


class ResolverConfig:
    def __init__(self, data):
        self.paths = data.get("paths", {}) or {}
        self.matching = {**DEFAULT_MATCHING, **(data.get("matching") or {})}
        self.search = {**DEFAULT_SEARCH, **(data.get("search") or {})}
        self.logging = data.get("logging", {}) or {}
        self.debug = data.get("debug", False)


def config_path() -> Path:
    override = os.environ.get(CONFIG_ENV_VAR)
    return Path(override) if override else CONFIG_PATH


def load_config(path: Path | None = None) -> 'ResolverConfig':
    path = path or config_path()
    if not path.exists():
        # Installed without the repo checkout: run on built-in defaults.
        return ResolverConfig({"logging": {"to_file": False}})

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid config file {path}: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a mapping")

    return ResolverConfig(data)


_config_cache = None


def get_config() -> 'ResolverConfig':
    global _config_cache
    if _config_cache is None:
        _config_cache = load_config()
    return _config_cache


def reset_config() -> None:
    global _config_cache
    _config_cache = None
