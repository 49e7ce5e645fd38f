"""
Objective Ledger models: the three per-participant tables and their read model.
Dataclasses for asdict() compatibility with the JSON store and the API.
"""
from dataclasses import dataclass
from typing import Optional

MAX_DESCRIPTION_LENGTH = 100
MIN_WEIGHT = 1
MAX_WEIGHT = 3


@dataclass
class ObjectiveRecord:
    """A participant's single objective. Existence means "active"."""
    description: str
    completed: bool = False


@dataclass
class PriorityRecord:
    weight: int


@dataclass
class TemporalRecord:
    """
    Absolute deadline on the global counter.
    alert_activated is stored but never raised by any ledger operation.
    """
    deadline: int
    alert_activated: bool = False


@dataclass(frozen=True)
class QueryResult:
    exists: bool
    description_length: int
    completed: bool

    @classmethod
    def absent(cls) -> "QueryResult":
        return cls(exists=False, description_length=0, completed=False)

    @classmethod
    def of(cls, record: ObjectiveRecord) -> "QueryResult":
        return cls(
            exists=True,
            description_length=len(record.description),
            completed=record.completed,
        )


@dataclass
class ParticipantRecords:
    """All rows held for one participant, as found by direct table lookup."""
    participant: str
    objective: Optional[ObjectiveRecord] = None
    priority: Optional[PriorityRecord] = None
    temporal: Optional[TemporalRecord] = None

    @property
    def is_orphaned(self) -> bool:
        return self.objective is None and (
            self.priority is not None or self.temporal is not None
        )
