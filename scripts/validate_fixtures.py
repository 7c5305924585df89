#!/usr/bin/env python3
"""Validation script for flow health fixture documents.

Validates every JSON file given on the command line (or every ``*.json``
under ``fixtures/`` at the repository root) against the fixtures schema and
checks that every execution status is known.
Exits with error code if any invalid files are found.
"""

from __future__ import annotations

import sys
from pathlib import Path

from flowhealth_runtime.adapters.file.json_fixture_store import create_file_repositories
from flowhealth_runtime.application.errors import FixtureValidationError


def find_repo_root() -> Path:
    """Find the repository root by looking for pyproject.toml."""
    current = Path(__file__).resolve()
    for parent in current.parents:
        if (parent / "pyproject.toml").exists():
            return parent
    return Path.cwd()


def main(argv: list[str]) -> int:
    if argv:
        files = [Path(a) for a in argv]
    else:
        fixtures_dir = find_repo_root() / "fixtures"
        files = sorted(fixtures_dir.glob("*.json")) if fixtures_dir.exists() else []

    if not files:
        print("No fixture files found", file=sys.stderr)
        return 1

    errors: list[str] = []
    for path in files:
        try:
            schedule_repo, history_repo = create_file_repositories(path)
        except (FixtureValidationError, OSError) as e:
            errors.append(f"{path}: {e}")
            continue
        flows = list(schedule_repo.list_scheduled_flows())
        print(f"✓ {path} ({len(flows)} scheduled flows, {len(history_repo.executions)} flows with history)")

    if errors:
        print("\nValidation errors:", file=sys.stderr)
        for error in errors:
            print(f"  {error}", file=sys.stderr)
        return 1

    print("\nAll files validated successfully!")
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
