#!/usr/bin/env python3
"""
Copy the stored snapshot from one backend to another.

Usage:
  python scripts/copy_snapshot.py --source json --target sql
"""
from __future__ import annotations

import argparse
from pathlib import Path
import sys

# Make the studymate package importable when run directly
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from studymate.core.config import get_settings  # noqa: E402
from studymate.core.errors import StudyMateError  # noqa: E402
from studymate.core.logging_config import init_logging  # noqa: E402
from studymate.repositories import BACKENDS, create_repository  # noqa: E402


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description="Copy the StudyMate snapshot between backends")
    ap.add_argument("--source", required=True, choices=BACKENDS, help="backend to load from")
    ap.add_argument("--target", required=True, choices=BACKENDS, help="backend to overwrite")
    args = ap.parse_args(argv)

    if args.source == args.target:
        raise SystemExit("Source and target must differ")

    settings = get_settings()
    init_logging(settings.log_level, settings.log_format)

    snapshot = create_repository(args.source, settings).load()
    create_repository(args.target, settings).save(snapshot)
    print(f"OK: copied {args.source} -> {args.target}")
    print(f"  courses: {len(snapshot.courses)}")
    print(f"  assignments: {len(snapshot.assignments)}")
    print(f"  notes: {len(snapshot.notes)}")
    print(f"  tests: {len(snapshot.tests)}")
    print(f"  habits: {len(snapshot.habits)}")
    print(f"  habit logs: {len(snapshot.habit_logs)}")
    if "csv" in (args.source, args.target):
        print("  note: the csv backend only stores courses and assignments")
    return 0


if __name__ == "__main__":
    try:
        raise SystemExit(main())
    except StudyMateError as exc:
        sys.stderr.write(f"Error: {exc.message}\n")
        raise SystemExit(1)
