"""Configuration loader for exdict.

Loads defaults and source records from config.json, with hardcoded fallbacks.
"""

import json
import logging
from pathlib import Path
from typing import Any, Optional

from .schema import SourceDescriptor

logger = logging.getLogger(__name__)

# Hardcoded fallback defaults
FALLBACK_DEFAULTS = {
    "encoding": "utf-8",
    "has_header": True,
    "quiet": False,
    "verbose": False,
}

_config: dict[str, Any] | None = None
_config_path: Path | None = None


def _find_config() -> Path | None:
    """Find config.json by walking up from current file."""
    paths = [
        Path(__file__).parent.parent.parent / "config.json",  # python/exdict -> root
        Path(__file__).parent.parent / "config.json",
        Path.cwd() / "config.json",
        Path.cwd().parent / "config.json",
    ]
    for path in paths:
        if path.exists():
            return path
    return None


def _read(path: Path) -> dict[str, Any] | None:
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except (json.JSONDecodeError, OSError) as e:
        logger.warning("Ignoring config %s: %s", path, e)
        return None
    if not isinstance(data, dict):
        logger.warning("Ignoring config %s: top level is not an object", path)
        return None
    return data


def load(path: Optional[Path | str] = None) -> dict[str, Any]:
    """Load configuration from config.json or use fallbacks.

    Args:
        path: Explicit config file. Bypasses discovery and the cache.
    """
    global _config, _config_path
    if path is None and _config is not None:
        return _config

    config_path = Path(path) if path is not None else _find_config()
    data = _read(config_path) if config_path else None

    if data is None:
        data = {"defaults": dict(FALLBACK_DEFAULTS), "sources": []}
        config_path = None

    if path is not None:
        return data

    _config = data
    _config_path = config_path
    return _config


def config_dir(path: Optional[Path | str] = None) -> Path:
    """Directory relative source paths resolve against."""
    if path is not None:
        return Path(path).resolve().parent
    load()
    if _config_path is not None:
        return _config_path.resolve().parent
    return Path.cwd()


def get_default(key: str, fallback: Any = None, cfg: Optional[dict[str, Any]] = None) -> Any:
    """Get a default value from config."""
    cfg = cfg if cfg is not None else load()
    return cfg.get("defaults", {}).get(key, fallback)


def load_sources(
    cfg: Optional[dict[str, Any]] = None,
    base_dir: Optional[Path] = None,
) -> list[SourceDescriptor]:
    """Parse the configured source records, in order.

    Invalid records are logged and skipped; the rest are returned.

    Args:
        cfg: Loaded config. Defaults to load().
        base_dir: Directory for relative paths. Defaults to config_dir().

    Returns:
        List of SourceDescriptor.
    """
    cfg = cfg if cfg is not None else load()
    base_dir = base_dir if base_dir is not None else config_dir()
    defaults = {
        "encoding": get_default("encoding", FALLBACK_DEFAULTS["encoding"], cfg),
        "has_header": get_default("has_header", FALLBACK_DEFAULTS["has_header"], cfg),
    }

    descriptors = []
    for i, record in enumerate(cfg.get("sources") or []):
        if not isinstance(record, dict):
            logger.error("Source #%d is not an object, skipped: %r", i, record)
            continue
        try:
            descriptors.append(
                SourceDescriptor.from_dict({**defaults, **record}, base_dir=base_dir)
            )
        except (TypeError, ValueError) as e:
            logger.error("Source #%d is invalid, skipped: %s", i, e)
    return descriptors


def check_paths(descriptors: list[SourceDescriptor]) -> list[SourceDescriptor]:
    """Return the descriptors whose file does not exist."""
    return [d for d in descriptors if not d.path.is_file()]

