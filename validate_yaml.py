#!/usr/bin/env python3
"""Validate the store YAML files in a data directory against the schema."""
import sys
from pathlib import Path

import yaml
from jsonschema import validate, ValidationError

from upkeep import ValidationError as UpkeepValidationError
from upkeep import parse_date
from upkeep.config import load_settings
from upkeep.store import load_schema, records_path, vehicles_path


def validate_store_file(filepath: Path, schema: dict) -> list[str]:
    """Validate a single store file against one collection schema. Returns list of errors."""
    errors = []
    try:
        with open(filepath, encoding="utf-8") as f:
            data = yaml.safe_load(f)
        validate(instance=data if data is not None else [], schema=schema)
    except yaml.YAMLError as e:
        errors.append(f"YAML parse error: {e}")
    except ValidationError as e:
        errors.append(f"Schema validation error: {e.message}")
        if e.path:
            errors.append(f"  at path: {'.'.join(str(p) for p in e.path)}")
    except OSError as e:
        errors.append(f"Error: {e}")
    except ValueError as e:
        # Undecodable bytes or an impossible unquoted date
        errors.append(f"Read error: {e}")
    else:
        for i, item in enumerate(data or []):
            if "serviceDate" not in item:
                continue
            try:
                parse_date(item["serviceDate"])
            except UpkeepValidationError as e:
                errors.append(f"Date error: {e}")
                errors.append(f"  at path: {i}.serviceDate")
    return errors


def main(argv=None):
    """Validate vehicles.yaml and records.yaml in the given (or configured) data directory."""
    argv = sys.argv[1:] if argv is None else argv
    data_dir = Path(argv[0]) if argv else load_settings().data_dir
    schema = load_schema()

    if not data_dir.exists():
        print(f"Error: data directory not found: {data_dir}")
        return 1

    all_valid = True
    for kind, filepath in (
        ("vehicles", vehicles_path(data_dir)),
        ("records", records_path(data_dir)),
    ):
        if not filepath.exists():
            print(f"SKIP: {filepath.name} (missing)")
            continue
        errors = validate_store_file(filepath, schema[kind])
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
