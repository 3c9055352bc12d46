"""Configuration loading utilities"""

import os
from importlib import resources
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field

from .paths import config_dir

API_URL_ENV = "PATIENTDASH_API_URL"
DEFAULT_CONFIG = "config.default.yaml"


class Config(BaseModel):
    """Pydantic model for the project configuration."""

    api: Dict[str, Any] = Field(default_factory=dict)
    dashboard: Dict[str, Any] = Field(default_factory=dict)
    map: Dict[str, Any] = Field(default_factory=dict)
    logging: Dict[str, Any] = Field(default_factory=dict)
    model_config = ConfigDict(extra="allow")


def _load_yaml(path: Path) -> Dict[str, Any]:
    with path.open("r", encoding="utf-8") as fh:
        return yaml.safe_load(fh) or {}


def merge_dicts(base: Dict[str, Any], updates: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge ``updates`` into ``base`` (nested dicts merge, the rest overwrite)."""
    for key, value in updates.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            base[key] = merge_dicts(dict(base[key]), value)
        else:
            base[key] = value
    return base


def _load_default() -> Dict[str, Any]:
    """Read the defaults shipped inside the package."""
    text = resources.files("patientdash").joinpath(DEFAULT_CONFIG).read_text(encoding="utf-8")
    return yaml.safe_load(text) or {}


def load_config(cfg_dir: Optional[Path] = None) -> Config:
    """Load the packaged defaults and merge ``config.local.yaml`` over them.

    The local file is looked up in ``cfg_dir`` (``./config`` by default) and
    is optional.  ``PATIENTDASH_API_URL`` in the environment overrides
    ``api.base_url``.
    """
    cfg_dir = Path(cfg_dir) if cfg_dir is not None else config_dir()
    local_path = cfg_dir / "config.local.yaml"

    default_cfg = _load_default()
    local_cfg: Dict[str, Any] = _load_yaml(local_path) if local_path.exists() else {}

    merged = merge_dicts(default_cfg.copy(), local_cfg)

    env_url = os.getenv(API_URL_ENV)
    if env_url:
        merged.setdefault("api", {})["base_url"] = env_url

    return Config.model_validate(merged)
