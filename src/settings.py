# src/settings.py
from __future__ import annotations

import copy
import logging
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from formats import FormatRegistry
from keywords import LoggingSink, TypeKeyword

logger = logging.getLogger(__name__)


# ---------------------------
# Config loading
# ---------------------------

DEFAULT_CONFIG: Dict[str, Any] = {
    "formats": {
        "plugins_dir": None,   # directory of *.yaml format plugins
        "builtins": True,
        "extra": {},           # {"string": {"slug": "myapp.formats:is_slug"}}
    },
    "diagnostics": {
        "enabled": True,
    },
    "logging": {
        "level": "INFO",
        "format": "%(name)s - %(levelname)s - %(message)s",
    },
}


def load_config(path: Optional[str | Path]) -> Dict[str, Any]:
    cfg = copy.deepcopy(DEFAULT_CONFIG)
    if not path:
        return cfg
    p = Path(path)
    if not p.exists():
        logger.warning("config not found: %s (using defaults)", p)
        return cfg
    with p.open("r", encoding="utf-8") as f:
        user = yaml.safe_load(f) or {}
    if not isinstance(user, dict):
        raise ValueError(f"{p}: expected a mapping at top level")
    # shallow merge of top-level sections
    for k, v in user.items():
        if isinstance(v, dict) and k in cfg and isinstance(cfg[k], dict):
            cfg[k].update(v)
        else:
            cfg[k] = v
    return cfg


def configure_logging(config: Dict[str, Any]) -> None:
    section = config.get("logging", {})
    level = section.get("level", "INFO")
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
    logging.basicConfig(
        level=level,
        format=section.get("format", DEFAULT_CONFIG["logging"]["format"]),
    )


# ---------------------------
# Wiring
# ---------------------------

def build_registry(config: Dict[str, Any]) -> FormatRegistry:
    """Registry populated from config, frozen before any validation runs."""
    section = config.get("formats", {})
    extra = {}
    for type_name, formats in (section.get("extra") or {}).items():
        for format_name, identifier in (formats or {}).items():
            extra[(type_name, format_name)] = identifier
    registry = FormatRegistry(
        extra_formats=extra,
        plugins_dir=section.get("plugins_dir"),
        include_builtins=bool(section.get("builtins", True)),
    )
    registry.freeze()
    logger.debug("Format registry ready with %d formats", len(registry))
    return registry


def build_type_keyword(config: Optional[Dict[str, Any]] = None) -> TypeKeyword:
    config = config if config is not None else load_config(None)
    sink = LoggingSink() if config.get("diagnostics", {}).get("enabled", True) else None
    return TypeKeyword(build_registry(config), sink=sink)
