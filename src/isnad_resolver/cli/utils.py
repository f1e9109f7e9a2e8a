from __future__ import annotations

import json
import time
from pathlib import Path
from typing import Any, Dict, Optional

from rich.console import Console

from isnad_resolver.config import get_config
from isnad_resolver.core.exceptions import RegistryError
from isnad_resolver.logging.logger import PROJECT_ROOT
from isnad_resolver.registry.entities import NarratorRegistry
from isnad_resolver.registry.json_loader import load_registry_json
from isnad_resolver.registry.sqlite_store import SqliteNarratorStore

console = Console()

SQLITE_SUFFIXES = {".db", ".sqlite", ".sqlite3"}


def resolve_registry_path(registry: Optional[Path]) -> Path:
    """
    --registry wins; otherwise ``paths.registry`` from the config, relative
    to the project root.
    """
    if registry is not None:
        return registry
    configured = get_config().paths.get("registry")
    if not configured:
        raise RegistryError("No registry given (use --registry or set paths.registry)")
    path = Path(configured)
    return path if path.is_absolute() else PROJECT_ROOT / path


def load_registry(registry: Optional[Path], *, verbose: bool = False) -> NarratorRegistry:
    """
    Load a registry from a SQLite database or a JSON export.
    """
    path = resolve_registry_path(registry)
    if not path.exists():
        raise RegistryError(f"Registry not found: {path}")

    t0 = time.perf_counter()
    if path.suffix.lower() in SQLITE_SUFFIXES:
        with SqliteNarratorStore(path) as store:
            loaded = store.load_registry()
    else:
        loaded = load_registry_json(path)
    elapsed = time.perf_counter() - t0

    if verbose:
        console.log(f"Loaded {len(loaded)} narrators in {elapsed:.2f}s")

    return loaded


def write_json(
    data: Dict[str, Any],
    *,
    out: Path | None = None,
    pretty: bool = True,
):
    """
    Write JSON to stdout or file.
    """
    if pretty:
        payload = json.dumps(data, indent=2, ensure_ascii=False)
    else:
        payload = json.dumps(data, separators=(",", ":"), ensure_ascii=False)

    if out:
        out.write_text(payload, encoding="utf-8")
    else:
        print(payload)
