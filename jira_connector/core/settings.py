"""Load connector settings from YAML (with fallbacks) and environment overrides."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import fields
from pathlib import Path

import yaml

from .config import ConnectorSettings

logger = logging.getLogger(__name__)

SETTINGS_FILE = "connector.yaml"

ENV_OVERRIDES: dict[str, str] = {
    "JIRA_SERVER": "server",
    "JIRA_USER": "user",
    "JIRA_PASSWORD": "password",
    "JIRA_PROJECT_KEY": "project_key",
}

_CACHE: ConnectorSettings | None = None


def _coerce(name: str, value):
    if name in {"timeout", "search_max_results"}:
        return int(value)
    if name == "strict_lookups":
        if isinstance(value, str):
            return value.strip().lower() in {"1", "true", "yes", "on"}
        return bool(value)
    return str(value) if value is not None else None


def settings_from_mapping(data: Mapping) -> ConnectorSettings:
    """Build settings from a mapping, ignoring unknown keys."""
    known = {f.name for f in fields(ConnectorSettings)}
    kwargs = {}
    for key, value in data.items():
        if key not in known:
            logger.warning("Ignoring unknown connector setting %r", key)
            continue
        kwargs[key] = _coerce(key, value)
    return ConnectorSettings(**kwargs)


def load_settings(
    path: str | Path | None = None,
    env: Mapping[str, str] | None = None,
) -> ConnectorSettings:
    """Load connector settings once and cache them.

    Parameters
    ----------
    path : str | Path | None
        YAML file to read. Defaults to ``connector.yaml`` at the project root.
        A missing file falls back to ``ConnectorSettings`` defaults.
    env : Mapping[str, str] | None
        Environment used for ``JIRA_*`` overrides (defaults to ``os.environ``).

    Returns
    -------
    ConnectorSettings
    """
    global _CACHE
    if _CACHE is not None:
        return _CACHE
    base = Path(__file__).resolve().parent.parent.parent
    yaml_path = Path(path) if path is not None else base / SETTINGS_FILE
    data: dict = {}
    if yaml_path.exists():
        loaded = yaml.safe_load(yaml_path.read_text()) or {}
        # Accept either a top-level mapping or a [jira] section
        data = dict(loaded.get("jira", loaded))
    else:
        logger.debug("No settings file at %s, using defaults", yaml_path)
    environ = os.environ if env is None else env
    for var, name in ENV_OVERRIDES.items():
        if environ.get(var):
            data[name] = environ[var]
    _CACHE = settings_from_mapping(data)
    return _CACHE


def clear_settings_cache() -> None:
    global _CACHE
    _CACHE = None
