#!/usr/bin/env python3
"""
Deployment utilities - shared helper functions.
"""

import os
import socket
from pathlib import Path

import yaml

from ..config.validation import validate_config
from ..errors import InvalidConfigFile

DEFAULT_CONFIG = Path(__file__).parent.parent / "config" / "deploy-config.yaml"


def load_yaml(file_path):
    with open(file_path, 'r') as f:
        return yaml.safe_load(f)


def deep_merge(base, override):
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value

    return result


def resolve_config_path(path=None):
    """Explicit path, then MWDEPLOY_CONFIG, then the packaged deploy-config.yaml."""
    if path:
        return Path(path)
    env_path = os.environ.get('MWDEPLOY_CONFIG', '').strip()
    if env_path:
        return Path(env_path)
    return DEFAULT_CONFIG


def load_config_file(path):
    """Read one YAML config document; it must be a non-empty mapping."""
    try:
        document = load_yaml(path)
    except OSError as e:
        raise InvalidConfigFile(path, e.strerror or str(e)) from e
    except yaml.YAMLError as e:
        raise InvalidConfigFile(path, f"YAML syntax error: {e}") from e

    if not document:
        raise InvalidConfigFile(path, "file is empty")
    if not isinstance(document, dict):
        raise InvalidConfigFile(path, f"expected a mapping at top level, got {type(document).__name__}")
    return document


def load_config(path=None):
    """
    Load configuration with optional local overrides.
    - Default: deploy-config.yaml (production mode)
    - DEPLOYMENT_ENV=local: merges deploy-config.local.yaml from the same directory
    The merged result is checked against mwdeploy/schemas/deploy-config-schema.json.
    """
    base_path = resolve_config_path(path)
    config = load_config_file(base_path)

    env = os.environ.get('DEPLOYMENT_ENV', '').strip()
    if env == 'local':
        override_path = base_path.with_name(base_path.stem + ".local" + base_path.suffix)
        if override_path.exists():
            config = deep_merge(config, load_config_file(override_path))

    validate_config(config, base_path)
    return config


def get_short_hostname(config=None):
    """Hostname up to the first dot, unless deployment.hostname overrides it."""
    if config:
        override = config.get('deployment', {}).get('hostname')
        if override:
            return override
    return socket.gethostname().split('.')[0]


def print_phase(title, detail=None):
    print(f"\n{'='*60}")
    if detail:
        print(f"{title} ({detail})")
    else:
        print(title)
    print(f"{'='*60}")


def split_list(value):
    """Split a comma-separated CLI value, dropping blanks."""
    if not value:
        return []
    return [item.strip() for item in value.split(',') if item.strip()]
