from __future__ import annotations
from typing import Any, Dict, Optional, Tuple
from pathlib import Path
import logging

import yaml

logger = logging.getLogger(__name__)


def _entry_key(entry: Dict[str, Any], source: Path) -> Tuple[Tuple[str, str], str]:
    missing = [k for k in ("type", "format", "validator") if not entry.get(k)]
    if missing:
        raise ValueError(f"{source}: format entry missing {', '.join(repr(k) for k in missing)}")
    return (str(entry["type"]), str(entry["format"])), str(entry["validator"])


def load_format_plugins(path: Optional[str | Path]) -> Dict[Tuple[str, str], str]:
    """
    Load YAML format plugins from a directory (optional).
    Returns {(type, format): "package.module:attr"}. No-op if path is missing.

    A file holds either one entry:
        type: string
        format: slug
        validator: myapp.formats:is_slug
    or several under a `formats:` list.
    """
    plugins: Dict[Tuple[str, str], str] = {}
    if not path:
        return plugins
    p = Path(path)
    if not p.exists() or not p.is_dir():
        logger.warning("Format plugin directory not found: %s", p)
        return plugins
    for yml in sorted(p.glob("*.yaml")):
        data = yaml.safe_load(yml.read_text(encoding="utf-8")) or {}
        if not isinstance(data, dict):
            raise ValueError(f"{yml}: expected a mapping at top level")
        # Allow single or multi-format files
        if "formats" in data and isinstance(data["formats"], list):
            for entry in data["formats"]:
                key, identifier = _entry_key(entry, yml)
                plugins[key] = identifier
        else:
            key, identifier = _entry_key(data, yml)
            plugins[key] = identifier
        logger.debug("Loaded format plugins from %s", yml)
    return plugins
