"""
Validate a persisted objective ledger.

Usage:
    python tools/check_store.py
    python tools/check_store.py --strict
    python tools/check_store.py --prune
"""
# ruff: noqa: E402
from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from objective_ledger.config_manager import config
from objective_ledger.exceptions import StateError
from objective_ledger.models import MAX_DESCRIPTION_LENGTH, MAX_WEIGHT, MIN_WEIGHT
from objective_ledger.paths import DATA_DIR
from objective_ledger.store import LedgerStore


def find_violations(store: LedgerStore) -> List[str]:
    problems = []
    for pid in store.participants():
        records = store.lookup(pid)
        if records.objective is not None:
            desc = records.objective.description
            if not desc:
                problems.append(f"{pid}: empty description")
            elif len(desc) > MAX_DESCRIPTION_LENGTH:
                problems.append(f"{pid}: description longer than {MAX_DESCRIPTION_LENGTH}")
        if records.priority is not None:
            if not MIN_WEIGHT <= records.priority.weight <= MAX_WEIGHT:
                problems.append(f"{pid}: weight {records.priority.weight} out of range")
        if records.temporal is not None and records.temporal.deadline < 1:
            problems.append(f"{pid}: non-positive deadline {records.temporal.deadline}")
    return problems


def check_store(path: Path, strict: bool = False, prune: bool = False) -> int:
    if not path.exists():
        print(f"[check] No ledger store found: {path}")
        return 0

    try:
        store = LedgerStore(path=path)
    except StateError as exc:
        print(f"[check] unreadable store: {exc.message}")
        return 1

    violations = find_violations(store)
    for line in violations:
        print(f"[check] violation: {line}")

    orphans = store.prune_orphans() if prune else store.orphans()
    for rec in orphans:
        print(f"[check] orphan: {rec.participant}")
    if prune and orphans:
        store.save()

    print(f"[check] participants={len(store.participants())}")
    print(f"[check] violations={len(violations)}")
    print(f"[check] orphans={len(orphans)}{' (pruned)' if prune else ''}")

    if violations or (strict and orphans and not prune):
        return 1
    return 0


def main() -> int:
    parser = argparse.ArgumentParser(description="Validate a persisted objective ledger.")
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Treat orphaned priority/deadline rows as failures.",
    )
    parser.add_argument(
        "--prune",
        action="store_true",
        help="Delete orphaned priority/deadline rows and save the store.",
    )
    parser.add_argument(
        "--path",
        type=Path,
        default=DATA_DIR / config.STORE_FILENAME,
        help="Override ledger store path.",
    )
    args = parser.parse_args()
    return check_store(path=args.path, strict=args.strict, prune=args.prune)


if __name__ == "__main__":
    sys.exit(main())
