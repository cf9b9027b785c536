#!/usr/bin/env python3
"""
Configuration and manifest validation.
Validates autopilot config and cf manifests against JSON schemas.
"""

import json
from pathlib import Path

import jsonschema
import yaml


SCHEMA_DIR = Path(__file__).parent / 'schemas'


class ConfigurationError(ValueError):
    """Invalid or missing configuration, detected before anything changes on the platform."""


def load_yaml(file_path):
    """Load YAML file safely. Returns (data, error)."""
    try:
        with open(file_path, 'r') as f:
            return yaml.safe_load(f), None
    except yaml.YAMLError as e:
        return None, str(e)
    except OSError as e:
        return None, str(e)


def load_schema(schema_name):
    schema_file = SCHEMA_DIR / schema_name
    with open(schema_file, 'r') as f:
        return json.load(f)


def validate_against_schema(document, schema_name):
    """
    Validate a document against one of the bundled JSON schemas.
    Returns (is_valid, errors_list)
    """
    try:
        schema = load_schema(schema_name)
    except (OSError, ValueError) as e:
        return False, [f"Error loading schema file {schema_name}: {e}"]

    try:
        jsonschema.validate(instance=document, schema=schema)
        return True, []
    except jsonschema.ValidationError as e:
        error_path = ' -> '.join(str(p) for p in e.path) if e.path else 'root'
        return False, [f"Schema validation failed at '{error_path}': {e.message}"]
    except jsonschema.SchemaError as e:
        return False, [f"Schema file is invalid: {e.message}"]


def validate_config(config):
    """Validate a loaded autopilot config. Returns (is_valid, errors_list)."""
    if not isinstance(config, dict):
        return False, ["Config must be a mapping"]
    return validate_against_schema(config, 'autopilot-config-schema.json')


def validate_manifest(manifest_file):
    """
    Pre-flight check of a cf manifest before anything is renamed.
    Returns (is_valid, errors_list)
    """
    manifest_path = Path(manifest_file)

    if not manifest_path.exists():
        return False, [f"Manifest not found: {manifest_file}"]

    manifest, err = load_yaml(manifest_path)
    if err:
        return False, [f"YAML syntax error in manifest: {err}"]

    if not manifest:
        return False, ["Manifest file is empty"]

    return validate_against_schema(manifest, 'cf-manifest-schema.json')


def require_valid(is_valid, errors, what):
    """Raise ConfigurationError carrying every validation error."""
    if is_valid:
        return
    details = '\n'.join(f"  - {error}" for error in errors)
    raise ConfigurationError(f"{what} validation failed:\n{details}")
