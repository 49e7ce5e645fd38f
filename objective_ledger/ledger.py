"""
Canonical objective ledger service.

Every operation validates first and commits second, under one ledger-wide
lock, so a rejected call never leaves partial state behind.
"""
import threading
from typing import List, Optional

from objective_ledger.config_manager import LedgerConfig, config as default_config
from objective_ledger.counter import build_counter
from objective_ledger.exceptions import EntityMissing, InvalidInput, LedgerError, RecordExists
from objective_ledger.logger import get_logger
from objective_ledger.models import (
    MAX_DESCRIPTION_LENGTH,
    MAX_WEIGHT,
    MIN_WEIGHT,
    ObjectiveRecord,
    ParticipantRecords,
    PriorityRecord,
    QueryResult,
    TemporalRecord,
)
from objective_ledger.paths import DATA_DIR
from objective_ledger.store import LedgerStore

logger = get_logger("ledger")


class ObjectiveLedger:
    """Application service for per-participant objective operations."""

    def __init__(
        self,
        store: Optional[LedgerStore] = None,
        counter=None,
        cfg: Optional[LedgerConfig] = None,
    ):
        self.config = cfg or default_config
        if store is None:
            path = DATA_DIR / self.config.STORE_FILENAME if self.config.PERSIST_STORE else None
            store = LedgerStore(path=path)
        self.store = store
        self.counter = counter or build_counter(self.config)
        self._lock = threading.RLock()

    # ---------------------------------------------------------------------
    # Validation helpers
    # ---------------------------------------------------------------------
    @staticmethod
    def _check_description(description) -> None:
        if not isinstance(description, str):
            raise InvalidInput("Description must be a string", field="description")
        if not description:
            raise InvalidInput("Description must not be empty", field="description")
        if len(description) > MAX_DESCRIPTION_LENGTH:
            raise InvalidInput(
                f"Description exceeds {MAX_DESCRIPTION_LENGTH} characters",
                field="description",
            )

    @staticmethod
    def _check_participant(participant, field: str = "participant") -> None:
        if not isinstance(participant, str) or not participant.strip():
            raise InvalidInput("Participant identity must be a non-empty string", field=field)

    @staticmethod
    def _check_int(value, field: str) -> None:
        # bool is an int subclass; True must not pass as 1
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidInput(f"{field} must be an integer", field=field)

    def _require_objective(self, participant: str) -> ObjectiveRecord:
        record = self.store.get_objective(participant)
        if record is None:
            raise EntityMissing(participant)
        return record

    def _run(self, op: str, participant: str, action):
        with self._lock:
            try:
                result = action()
            except LedgerError as exc:
                logger.info("%s rejected for %s: %s (%s)", op, participant, exc.code, exc.message)
                raise
        return result

    # ---------------------------------------------------------------------
    # Command operations
    # ---------------------------------------------------------------------
    def register(self, caller: str, description: str) -> str:
        def action():
            self._check_participant(caller)
            if self.store.has_objective(caller):
                raise RecordExists(caller)
            self._check_description(description)

            self.store.put_objective(caller, ObjectiveRecord(description=description))
            self.store.save()
            logger.info("Objective registered for %s", caller)
            return "Objective registered successfully"

        return self._run("register", caller, action)

    def modify(self, caller: str, description: str, completed: bool) -> str:
        def action():
            self._check_participant(caller)
            record = self._require_objective(caller)
            self._check_description(description)
            if not isinstance(completed, bool):
                raise InvalidInput("Completion status must be a boolean", field="completed")

            record.description = description
            record.completed = completed
            self.store.save()
            logger.info("Objective modified for %s (completed=%s)", caller, completed)
            return "Objective updated successfully"

        return self._run("modify", caller, action)

    def terminate(self, caller: str) -> str:
        def action():
            self._check_participant(caller)
            self._require_objective(caller)

            self.store.delete_objective(caller)
            if self.config.CASCADE_ON_TERMINATE:
                self.store.delete_priority(caller)
                self.store.delete_temporal(caller)
            self.store.save()
            logger.info(
                "Objective terminated for %s (cascade=%s)",
                caller, self.config.CASCADE_ON_TERMINATE,
            )
            return "Objective removed successfully"

        return self._run("terminate", caller, action)

    def configure_priority(self, caller: str, weight: int) -> str:
        def action():
            self._check_participant(caller)
            self._require_objective(caller)
            self._check_int(weight, "weight")
            if not MIN_WEIGHT <= weight <= MAX_WEIGHT:
                raise InvalidInput(
                    f"Weight must be between {MIN_WEIGHT} and {MAX_WEIGHT}", field="weight"
                )

            self.store.put_priority(caller, PriorityRecord(weight=weight))
            self.store.save()
            logger.info("Priority %d configured for %s", weight, caller)
            return "Objective priority configured successfully"

        return self._run("configure_priority", caller, action)

    def establish_deadline(self, caller: str, duration: int) -> str:
        def action():
            self._check_participant(caller)
            self._require_objective(caller)
            self._check_int(duration, "duration")
            if duration <= 0:
                raise InvalidInput("Duration must be positive", field="duration")

            deadline = self.counter.current() + duration
            self.store.put_temporal(caller, TemporalRecord(deadline=deadline))
            self.store.save()
            logger.info("Deadline %d established for %s", deadline, caller)
            return "Objective deadline established successfully"

        return self._run("establish_deadline", caller, action)

    def delegate(self, caller: str, target: str, description: str) -> str:
        """
        Create an objective for `target` on behalf of `caller`.
        Any caller may delegate to any participant; only the target's row is checked.
        """
        def action():
            self._check_participant(caller)
            self._check_participant(target, field="target")
            if self.store.has_objective(target):
                raise RecordExists(target)
            self._check_description(description)

            self.store.put_objective(target, ObjectiveRecord(description=description))
            self.store.save()
            logger.info("Objective delegated by %s to %s", caller, target)
            return "Objective delegated successfully"

        return self._run("delegate", caller, action)

    # ---------------------------------------------------------------------
    # Query operations
    # ---------------------------------------------------------------------
    def query(self, caller: str) -> QueryResult:
        with self._lock:
            record = self.store.get_objective(caller)
            if record is None:
                return QueryResult.absent()
            return QueryResult.of(record)

    def lookup(self, participant: str) -> ParticipantRecords:
        with self._lock:
            return self.store.lookup(participant)

    def orphans(self) -> List[ParticipantRecords]:
        with self._lock:
            return self.store.orphans()

    def prune_orphans(self) -> List[ParticipantRecords]:
        with self._lock:
            removed = self.store.prune_orphans()
            if removed:
                self.store.save()
                logger.info("Pruned orphaned rows for %d participants", len(removed))
            return removed
