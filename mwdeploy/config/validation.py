#!/usr/bin/env python3
"""
Validation for deploy requests and the deploy configuration file.

Request validation is fail-fast: the first violation found is raised,
checking extensions, then skins, then servers, then the language filter.
Config validation uses the JSON schema shipped in mwdeploy/schemas/.
"""

import json
from pathlib import Path

import jsonschema

from ..errors import (
    InvalidConfigFile, LanguageWithoutLocalization,
    NoServersSpecified, UnknownTarget
)

SCHEMA_FILE = Path(__file__).parent.parent / "schemas" / "deploy-config-schema.json"


def load_schema(schema_file=SCHEMA_FILE):
    with open(schema_file, 'r') as f:
        return json.load(f)


def validate_config(config, config_path, schema_file=SCHEMA_FILE):
    """Raise InvalidConfigFile if config does not match the schema."""
    try:
        schema = load_schema(schema_file)
    except (OSError, ValueError) as e:
        raise InvalidConfigFile(config_path, f"cannot load schema {schema_file}: {e}") from e

    try:
        jsonschema.validate(instance=config, schema=schema)
    except jsonschema.ValidationError as e:
        # Parse validation error into readable message
        error_path = ' -> '.join(str(p) for p in e.path) if e.path else 'root'
        raise InvalidConfigFile(config_path, f"schema validation failed at '{error_path}': {e.message}") from e
    except jsonschema.SchemaError as e:
        raise InvalidConfigFile(config_path, f"schema file is invalid: {e.message}") from e


def validate_request(request, inventory):
    """Check a resolved DeployRequest against the inventory snapshot."""
    for ext in request.extensions:
        if ext not in inventory.extensions:
            raise UnknownTarget('extension', ext)

    for skin in request.skins:
        if skin not in inventory.skins:
            raise UnknownTarget('skin', skin)

    if not request.servers:
        raise NoServersSpecified()

    if request.languages and not request.localization:
        raise LanguageWithoutLocalization()
