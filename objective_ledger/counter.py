"""
Monotonic counters standing in for block height.

The ledger only ever calls current(); deadlines are computed as
current() + duration.
"""
import threading
import time
from typing import Callable, Optional

from objective_ledger.config_manager import LedgerConfig


class ManualCounter:
    """Counter advanced explicitly by the caller (tests, CLI)."""

    def __init__(self, start: int = 0):
        if start < 0:
            raise ValueError("Counter start must not be negative")
        self._value = start
        self._lock = threading.Lock()

    def current(self) -> int:
        return self._value

    def advance(self, blocks: int = 1) -> int:
        if blocks <= 0:
            raise ValueError("Counter can only move forward")
        with self._lock:
            self._value += blocks
            return self._value


class ClockCounter:
    """Height derived from wall time: one block per `interval_seconds`."""

    def __init__(
        self,
        interval_seconds: int = 600,
        genesis: float = 0.0,
        clock: Optional[Callable[[], float]] = None,
    ):
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be positive")
        self._interval = interval_seconds
        self._genesis = genesis
        self._clock = clock or time.time
        self._last = 0
        self._lock = threading.Lock()

    def current(self) -> int:
        height = max(0, int((self._clock() - self._genesis) // self._interval))
        with self._lock:
            # wall clocks can step backwards; the height must not
            if height > self._last:
                self._last = height
            return self._last


def build_counter(cfg: LedgerConfig):
    if cfg.COUNTER_MODE == "manual":
        return ManualCounter(start=cfg.COUNTER_START)
    return ClockCounter(interval_seconds=cfg.BLOCK_INTERVAL_SECONDS)
