"""Config loading helpers."""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List

import yaml


def _read(path: Path) -> Any:
    if not path.exists():
        raise FileNotFoundError(path)
    with path.open("r", encoding="utf-8") as fh:
        if path.suffix.lower() in {".yaml", ".yml"}:
            return yaml.safe_load(fh)
        return json.load(fh)


def load_config(path: str | Path) -> Dict[str, Any]:
    """Read a JSON or YAML engine config (``shifts`` / ``policy`` sections)."""
    data = _read(Path(path)) or {}
    if not isinstance(data, dict):
        raise ValueError(f"{path}: config must be a mapping")
    return data


def load_staff(path: str | Path) -> List[Dict[str, Any]]:
    """Read staff profiles from a JSON/YAML list or a ``{"staff": [...]}`` document."""
    data = _read(Path(path)) or []
    if isinstance(data, dict):
        data = data.get("staff", [])
    if not isinstance(data, list):
        raise ValueError(f"{path}: staff must be a list")
    return [dict(item) for item in data]
