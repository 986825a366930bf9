#!/usr/bin/env python3
"""Validate logbook YAML files and the task catalog against their schemas."""
import sys
from pathlib import Path

import yaml
from jsonschema import validate, ValidationError

from engine.catalog import CATALOG_SCHEMA_PATH, DEFAULT_CATALOG_PATH, load_schema
from engine.loader import LOGBOOK_SCHEMA_PATH, read_yaml


def validate_file(filepath: Path, schema: dict) -> list[str]:
    """Validate a single YAML file against a schema. Returns list of errors."""
    errors = []
    try:
        data = read_yaml(filepath)
        validate(instance=data, schema=schema)
    except yaml.YAMLError as e:
        errors.append(f"YAML parse error: {e}")
    except ValidationError as e:
        errors.append(f"Schema validation error: {e.message}")
        if e.path:
            errors.append(f"  at path: {'.'.join(str(p) for p in e.path)}")
    except OSError as e:
        errors.append(f"Error: {e}")
    return errors


def validate_logbook_file(filepath: Path) -> list[str]:
    """Validate a logbook YAML file. Returns list of errors."""
    return validate_file(filepath, load_schema(LOGBOOK_SCHEMA_PATH))


def main(argv=None):
    """Validate the bundled catalog and all logbook files in a directory."""
    argv = sys.argv[1:] if argv is None else argv
    vehicles_dir = Path(argv[0]) if argv else Path(__file__).parent / "vehicles"

    all_valid = True
    errors = validate_file(DEFAULT_CATALOG_PATH, load_schema(CATALOG_SCHEMA_PATH))
    if errors:
        print(f"FAIL: {DEFAULT_CATALOG_PATH.name}")
        for error in errors:
            print(f"  {error}")
        all_valid = False
    else:
        print(f"OK: {DEFAULT_CATALOG_PATH.name}")

    if not vehicles_dir.exists():
        print(f"Error: vehicles directory not found: {vehicles_dir}")
        return 1

    yaml_files = list(vehicles_dir.glob("*.yaml")) + list(vehicles_dir.glob("*.yml"))

    if not yaml_files:
        print(f"Warning: No YAML files found in {vehicles_dir}")
        return 0 if all_valid else 1

    for filepath in sorted(yaml_files):
        errors = validate_logbook_file(filepath)
        if errors:
            print(f"FAIL: {filepath.name}")
            for error in errors:
                print(f"  {error}")
            all_valid = False
        else:
            print(f"OK: {filepath.name}")

    return 0 if all_valid else 1


if __name__ == "__main__":
    sys.exit(main())
