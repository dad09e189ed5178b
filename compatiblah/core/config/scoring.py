from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml

SCORING_CONFIG_PATH = Path(__file__).resolve().parent / "scoring.yaml"


def load_scoring_file(path: Path) -> dict[str, Any]:
    """Read a scoring YAML file; the top level must be a mapping."""
    try:
        parsed = yaml.safe_load(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise RuntimeError(f"Scoring config unreadable at '{path}': {exc}") from exc
    except yaml.YAMLError as exc:
        raise RuntimeError(f"Invalid YAML in scoring config '{path}': {exc}") from exc

    if not isinstance(parsed, dict):
        raise RuntimeError(f"Scoring config '{path}' must be a mapping of sections.")
    return parsed


@lru_cache(maxsize=1)
def get_scoring_config() -> dict[str, Any]:
    return load_scoring_file(SCORING_CONFIG_PATH)


def get_scoring_value(path: str, default: Any = None) -> Any:
    """Dotted lookup such as ``blend.heuristic_weight``; ``default`` when any key is missing."""
    if not path:
        return default

    node: Any = get_scoring_config()
    for key in path.split("."):
        if not isinstance(node, dict) or key not in node:
            return default
        node = node[key]
    return node
