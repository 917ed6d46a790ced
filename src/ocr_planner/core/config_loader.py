"""
YAML → settings loader.

Loads user-facing defaults from defaults.yaml (bundled with the package)
and optionally merges user overrides from ~/.ocr-planner/config.yaml.
The coach directory is read from the bundled coaches.yaml the same way.

Usage:
    from ocr_planner.core.config_loader import load_settings
    settings = load_settings()
    days = settings["athlete"]["training_days"]

If the user override file exists but cannot be parsed, a warning is
issued and the file is ignored.
"""

from __future__ import annotations

import importlib.resources
import os
import warnings
from pathlib import Path
from typing import Any

import yaml

PACKAGE = "ocr_planner"
USER_DIR_NAME = ".ocr-planner"


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _load_yaml_file(path: Path) -> dict[str, Any]:
    """Load a single YAML mapping; raise ValueError when it is not one."""
    with open(path, "r", encoding="utf-8") as fh:
        data = yaml.safe_load(fh)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"{path}: top level must be a mapping")
    return data


def _deep_merge(base: dict, override: dict) -> dict:
    """Recursively merge *override* into *base* (non-destructive to base)."""
    result = dict(base)
    for k, v in override.items():
        if isinstance(v, dict) and isinstance(result.get(k), dict):
            result[k] = _deep_merge(result[k], v)
        else:
            result[k] = v
    return result


def _load_bundled(name: str) -> dict[str, Any]:
    ref = importlib.resources.files(PACKAGE).joinpath(name)
    with importlib.resources.as_file(ref) as p:
        return _load_yaml_file(p)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def get_user_dir() -> Path:
    """Return ~/.ocr-planner (honours $HOME)."""
    home = Path(os.environ.get("HOME", "~")).expanduser()
    return home / USER_DIR_NAME


def get_user_config_path() -> Path | None:
    """Return ~/.ocr-planner/config.yaml if it exists, else None."""
    p = get_user_dir() / "config.yaml"
    return p if p.exists() else None


def load_settings(user_path: Path | None = None) -> dict[str, Any]:
    """
    Load and merge settings from YAML sources.

    Load order (later overrides earlier):
    1. Bundled ocr_planner/defaults.yaml
    2. User override (``user_path`` or ~/.ocr-planner/config.yaml)

    Returns:
        Merged settings dict
    """
    settings = _load_bundled("defaults.yaml")

    if user_path is None:
        user_path = get_user_config_path()
    if user_path is not None and user_path.exists():
        try:
            settings = _deep_merge(settings, _load_yaml_file(user_path))
        except (yaml.YAMLError, ValueError, OSError) as exc:
            warnings.warn(
                f"ocr-planner: ignoring user config {user_path} ({exc})",
                stacklevel=2,
            )

    return settings


def default_data_dir(settings: dict[str, Any] | None = None) -> Path:
    """Directory holding logs.jsonl and plan.json."""
    if settings is None:
        settings = load_settings()
    configured = settings.get("data_dir")
    if configured:
        return Path(str(configured)).expanduser()
    return get_user_dir()


def load_coach_records() -> list[dict[str, Any]]:
    """Raw coach records from the bundled coaches.yaml."""
    data = _load_bundled("coaches.yaml")
    coaches = data.get("coaches", [])
    if not isinstance(coaches, list):
        raise ValueError("coaches.yaml: 'coaches' must be a list")
    return coaches
