#!/usr/bin/env python3
"""Validate ledger YAML files against the schema and ledger invariants."""
import sys
from pathlib import Path

import yaml
from jsonschema import validate, ValidationError

from maintlog import check_invariants, load_ledger


def load_schema() -> dict:
    """Load the JSON schema from schema.yaml."""
    schema_path = Path(__file__).parent / "schema.yaml"
    with open(schema_path) as f:
        return yaml.safe_load(f)


def validate_ledger_file(filepath: Path, schema: dict) -> list[str]:
    """Validate a single ledger YAML file. Returns list of errors."""
    errors = []
    try:
        with open(filepath) as f:
            data = yaml.safe_load(f)
        validate(instance=data, schema=schema)
    except yaml.YAMLError as e:
        errors.append(f"YAML parse error: {e}")
        return errors
    except ValidationError as e:
        errors.append(f"Schema validation error: {e.message}")
        if e.path:
            errors.append(f"  at path: {'.'.join(str(p) for p in e.path)}")
        return errors
    except OSError as e:
        errors.append(f"Error: {e}")
        return errors

    log, _ = load_ledger(filepath)
    errors.extend(f"Invariant violation: {problem}" for problem in check_invariants(log))
    return errors


def main(argv=None):
    """Validate the given ledger files, or every YAML file in ledgers/."""
    schema = load_schema()
    argv = sys.argv[1:] if argv is None else argv

    if argv:
        yaml_files = [Path(arg) for arg in argv]
    else:
        ledgers_dir = Path(__file__).parent / "ledgers"
        if not ledgers_dir.exists():
            print(f"Error: ledgers directory not found: {ledgers_dir}")
            return 1
        yaml_files = list(ledgers_dir.glob("*.yaml")) + list(ledgers_dir.glob("*.yml"))

    if not yaml_files:
        print("Warning: No YAML files found")
        return 0

    all_valid = True
    for filepath in sorted(yaml_files):
        errors = validate_ledger_file(filepath, schema)
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
