# Objective Ledger: per-participant objective records with priority and deadline tables.

from objective_ledger.exceptions import (
    EntityMissing,
    InvalidInput,
    LedgerError,
    RecordExists,
)
from objective_ledger.ledger import ObjectiveLedger
from objective_ledger.models import (
    ObjectiveRecord,
    ParticipantRecords,
    PriorityRecord,
    QueryResult,
    TemporalRecord,
)
from objective_ledger.store import LedgerStore

__all__ = [
    "ObjectiveLedger",
    "LedgerStore",
    "ObjectiveRecord",
    "PriorityRecord",
    "TemporalRecord",
    "QueryResult",
    "ParticipantRecords",
    "LedgerError",
    "EntityMissing",
    "InvalidInput",
    "RecordExists",
]
