"""Load a naming environment from a YAML or JSON file.

Nested mappings are flattened into dotted property keys, so

    naming:
      provider:
        url: remote+http://localhost:8080

yields ``{"naming.provider.url": "remote+http://localhost:8080"}``.
"""

from __future__ import annotations

import json
import logging
import os
from typing import Any, Dict, List, Mapping, Optional

import yaml

from constants import Constants

logger = logging.getLogger(__name__)


def flatten(data: Mapping[str, Any], prefix: str = "") -> Dict[str, Any]:
    """Flatten nested mappings into dotted keys; scalar lists become comma lists."""
    flat: Dict[str, Any] = {}
    for key, value in data.items():
        full_key = f"{prefix}{key}"
        if isinstance(value, Mapping):
            flat.update(flatten(value, full_key + "."))
        elif isinstance(value, (list, tuple)):
            flat[full_key] = ",".join(str(item) for item in value)
        else:
            flat[full_key] = value
    return flat


def _candidate_paths(path: Optional[str]) -> List[str]:
    if path:
        return [path]
    candidates = []
    env_path = os.environ.get(Constants.ENV_CONFIG)
    if env_path:
        candidates.append(env_path)
    candidates.extend(Constants.DEFAULT_CONFIG_PATHS)
    return candidates


def _read(path: str) -> Any:
    with open(path, "r", encoding="utf-8") as fh:
        if path.lower().endswith(".json"):
            return json.load(fh)
        return yaml.safe_load(fh)


def load_environment(path: Optional[str] = None) -> Dict[str, Any]:
    """Return the flattened naming environment from the first config file found.

    Args:
        path: Explicit config path. When omitted, ``$NAMING_CONFIG`` and the
            default locations are tried in order.

    Raises:
        ValueError: if the selected file cannot be parsed or is not a mapping.
    """
    for candidate in _candidate_paths(path):
        expanded = os.path.expanduser(candidate)
        if not os.path.isfile(expanded):
            if path:
                logger.warning("Config file not found: %s", expanded)
            continue
        try:
            data = _read(expanded)
        except (yaml.YAMLError, json.JSONDecodeError) as exc:
            raise ValueError(f"Failed to parse config file {expanded}: {exc}") from exc
        if data is None:
            data = {}
        if not isinstance(data, Mapping):
            raise ValueError(f"Config file {expanded} must contain a mapping")
        logger.debug("Loaded naming config from %s", expanded)
        return flatten(data)
    return {}
