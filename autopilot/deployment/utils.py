#!/usr/bin/env python3
"""
Deployment utilities - shared helper functions.
"""

import copy
import os
from dataclasses import dataclass
from pathlib import Path

import yaml

from ..config.validation import ConfigurationError, validate_config, require_valid


VENERABLE_SUFFIX = 'venerable'
ROLLBACK_SUFFIX = 'rollback'

DEFAULT_CONFIG = {
    'executor': 'local',
    'cf': {'binary': 'cf'},
}


@dataclass(frozen=True)
class AutopilotOptions:
    keep_existing: bool = False


@dataclass(frozen=True)
class AppState:
    """Existence facts captured once, before planning."""

    live_exists: bool
    venerable_exists: bool = False


def venerable_app_name(app_name):
    return f"{app_name}-{VENERABLE_SUFFIX}"


def rollback_app_name(app_name):
    return f"{app_name}-{ROLLBACK_SUFFIX}"


def load_yaml(file_path):
    with open(file_path, 'r') as f:
        return yaml.safe_load(f)


def deep_merge(base, override):
    result = copy.deepcopy(base)

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value

    return result


def default_config_path():
    root = Path(__file__).parent.parent.parent
    return root / "config" / "autopilot-config.yaml"


def _load_config_file(path):
    try:
        loaded = load_yaml(path)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Error loading {path.name}: {e}")

    if loaded is None:
        return {}
    if not isinstance(loaded, dict):
        raise ConfigurationError(f"{path.name} must be a mapping, got {type(loaded).__name__}")
    return loaded


def load_config(config_path=None):
    """
    Load configuration with optional local overrides.
    - Path: explicit argument, else AUTOPILOT_CONFIG, else config/autopilot-config.yaml
    - AUTOPILOT_ENV=local: merges autopilot-config.local.yaml from the same directory
    - Missing default file: built-in defaults (local cf binary)
    """
    explicit = config_path or os.environ.get('AUTOPILOT_CONFIG')
    base_path = Path(explicit) if explicit else default_config_path()

    if not base_path.exists():
        if explicit:
            raise ConfigurationError(f"Config file not found: {base_path}")
        return deep_merge(DEFAULT_CONFIG, {})

    config = deep_merge(DEFAULT_CONFIG, _load_config_file(base_path))

    env = os.environ.get('AUTOPILOT_ENV', '').strip()
    if env == 'local':
        override_path = base_path.with_name(base_path.stem + '.local' + base_path.suffix)
        if override_path.exists():
            config = deep_merge(config, _load_config_file(override_path))

    is_valid, errors = validate_config(config)
    require_valid(is_valid, errors, f"Config {base_path.name}")
    return config
