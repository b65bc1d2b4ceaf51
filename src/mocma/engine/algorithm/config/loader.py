"""
Config loading for MO-CMA-ES runs described in YAML or JSON files.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict

from .mocma import MOCMAConfig, MOCMAConfigData


def load_config_mapping(path: str | Path) -> Dict[str, Any]:
    """
    Load a YAML or JSON mapping. A top-level ``mocma`` section is unwrapped.
    """
    spec_path = Path(path).expanduser().resolve()
    if not spec_path.exists():
        raise FileNotFoundError(f"Config file '{spec_path}' does not exist.")
    suffix = spec_path.suffix.lower()
    with spec_path.open("r", encoding="utf-8") as fh:
        if suffix in {".yaml", ".yml"}:
            try:
                import yaml  # type: ignore
            except ImportError as exc:  # pragma: no cover - optional dependency
                raise ImportError("YAML config requested but PyYAML is not installed. Install with 'pip install pyyaml'.") from exc
            data = yaml.safe_load(fh) or {}
        else:
            data = json.load(fh)
    if isinstance(data, dict) and isinstance(data.get("mocma"), dict):
        data = data["mocma"]
    return data


def load_config(path: str | Path) -> MOCMAConfigData:
    """Read a config file and build a validated ``MOCMAConfigData``."""
    return MOCMAConfig.from_mapping(load_config_mapping(path))


__all__ = ["load_config", "load_config_mapping"]
