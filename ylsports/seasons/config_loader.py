from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional

import yaml

_ROOT = Path(__file__).resolve().parent.parent.parent


def default_config_path() -> Path:
    return _ROOT / "config" / "league.yaml"


def load_league_config(path: Optional[Path] = None) -> Dict[str, Any]:
    cfg_path = Path(path) if path is not None else default_config_path()
    if not cfg_path.exists():
        return {}
    try:
        data = yaml.safe_load(cfg_path.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError):
        return {}
    if not isinstance(data, dict):
        return {}
    return data


def resolve_sports_dir(config: Dict[str, Any]) -> Optional[Path]:
    raw = config.get("sports_dir")
    if not raw:
        return None
    p = Path(str(raw))
    return p if p.is_absolute() else _ROOT / p
