"""
LedgerStore: three keyed tables (objective / priority / temporal bounds) with
optional JSON persistence. Tables are correlated by participant identity only;
nothing here enforces referential integrity between them.
"""
import json
from dataclasses import asdict, replace
from pathlib import Path
from typing import Dict, List, Optional

from objective_ledger.exceptions import StateError
from objective_ledger.logger import get_logger
from objective_ledger.models import (
    ObjectiveRecord,
    ParticipantRecords,
    PriorityRecord,
    TemporalRecord,
)

logger = get_logger("store")

OBJECTIVES = "objectives"
PRIORITIES = "priorities"
TEMPORAL_BOUNDS = "temporal_bounds"


def _expect(value, kind: type, key: str):
    # persisted values are taken as-is, never coerced; bool is not an int here
    if kind is int and isinstance(value, bool) or not isinstance(value, kind):
        raise TypeError(f"{key} must be {kind.__name__}, got {value!r}")
    return value


def _objective_from_dict(d: dict) -> ObjectiveRecord:
    return ObjectiveRecord(
        description=_expect(d["description"], str, "description"),
        completed=_expect(d.get("completed", False), bool, "completed"),
    )


def _priority_from_dict(d: dict) -> PriorityRecord:
    return PriorityRecord(weight=_expect(d["weight"], int, "weight"))


def _temporal_from_dict(d: dict) -> TemporalRecord:
    return TemporalRecord(
        deadline=_expect(d["deadline"], int, "deadline"),
        alert_activated=_expect(d.get("alert_activated", False), bool, "alert_activated"),
    )


def _copy(record):
    return replace(record) if record is not None else None


class LedgerStore:
    """In-memory tables; persisted to `path` on save() when a path is given."""

    def __init__(self, path: Optional[Path] = None):
        self._path = path
        self._objectives: Dict[str, ObjectiveRecord] = {}
        self._priorities: Dict[str, PriorityRecord] = {}
        self._temporal: Dict[str, TemporalRecord] = {}
        self._load()

    @property
    def path(self) -> Optional[Path]:
        return self._path

    def _load(self) -> None:
        if self._path is None or not self._path.exists():
            return
        try:
            with open(self._path, "r", encoding="utf-8") as f:
                data = json.load(f)
            if not isinstance(data, dict):
                raise ValueError("top-level value is not an object")
            objectives = {
                pid: _objective_from_dict(d) for pid, d in data.get(OBJECTIVES, {}).items()
            }
            priorities = {
                pid: _priority_from_dict(d) for pid, d in data.get(PRIORITIES, {}).items()
            }
            temporal = {
                pid: _temporal_from_dict(d) for pid, d in data.get(TEMPORAL_BOUNDS, {}).items()
            }
        except (json.JSONDecodeError, OSError, KeyError, TypeError, ValueError, AttributeError) as exc:
            logger.error("Failed to load ledger store %s: %s", self._path, exc)
            raise StateError(f"Ledger store is unreadable: {exc}", store_path=str(self._path)) from exc

        self._objectives = objectives
        self._priorities = priorities
        self._temporal = temporal
        logger.info(
            "Loaded ledger store %s (%d objectives, %d priorities, %d deadlines)",
            self._path, len(objectives), len(priorities), len(temporal),
        )

    def to_dict(self) -> dict:
        return {
            OBJECTIVES: {pid: asdict(r) for pid, r in self._objectives.items()},
            PRIORITIES: {pid: asdict(r) for pid, r in self._priorities.items()},
            TEMPORAL_BOUNDS: {pid: asdict(r) for pid, r in self._temporal.items()},
        }

    def save(self) -> None:
        if self._path is None:
            return
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self._path.with_suffix(self._path.suffix + ".tmp")
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump(self.to_dict(), f, ensure_ascii=False, indent=2)
        tmp_path.replace(self._path)

    # ------------------------------------------------------------------
    # Objective table
    # ------------------------------------------------------------------
    def has_objective(self, participant: str) -> bool:
        return participant in self._objectives

    def get_objective(self, participant: str) -> Optional[ObjectiveRecord]:
        return self._objectives.get(participant)

    def put_objective(self, participant: str, record: ObjectiveRecord) -> None:
        self._objectives[participant] = record

    def delete_objective(self, participant: str) -> Optional[ObjectiveRecord]:
        return self._objectives.pop(participant, None)

    # ------------------------------------------------------------------
    # Priority table
    # ------------------------------------------------------------------
    def get_priority(self, participant: str) -> Optional[PriorityRecord]:
        return self._priorities.get(participant)

    def put_priority(self, participant: str, record: PriorityRecord) -> None:
        self._priorities[participant] = record

    def delete_priority(self, participant: str) -> Optional[PriorityRecord]:
        return self._priorities.pop(participant, None)

    # ------------------------------------------------------------------
    # Temporal-bounds table
    # ------------------------------------------------------------------
    def get_temporal(self, participant: str) -> Optional[TemporalRecord]:
        return self._temporal.get(participant)

    def put_temporal(self, participant: str, record: TemporalRecord) -> None:
        self._temporal[participant] = record

    def delete_temporal(self, participant: str) -> Optional[TemporalRecord]:
        return self._temporal.pop(participant, None)

    # ------------------------------------------------------------------
    # Cross-table views
    # ------------------------------------------------------------------
    def participants(self) -> List[str]:
        keys = set(self._objectives) | set(self._priorities) | set(self._temporal)
        return sorted(keys)

    def lookup(self, participant: str) -> ParticipantRecords:
        """Snapshot of all rows for `participant`; editing it leaves the tables untouched."""
        return ParticipantRecords(
            participant=participant,
            objective=_copy(self._objectives.get(participant)),
            priority=_copy(self._priorities.get(participant)),
            temporal=_copy(self._temporal.get(participant)),
        )

    def orphans(self) -> List[ParticipantRecords]:
        """Participants holding priority/temporal rows without an objective row."""
        found = [self.lookup(pid) for pid in self.participants()]
        return [r for r in found if r.is_orphaned]

    def prune_orphans(self) -> List[ParticipantRecords]:
        removed = self.orphans()
        for rec in removed:
            self._priorities.pop(rec.participant, None)
            self._temporal.pop(rec.participant, None)
        return removed
