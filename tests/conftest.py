import os
import sys
from pathlib import Path

import pytest


PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

# Keep tests deterministic: never pick up a developer's runtime.yaml.
os.environ.setdefault("OBJECTIVE_LEDGER_CONFIG", str(PROJECT_ROOT / "tests" / "_no_runtime.yaml"))

from objective_ledger.config_manager import LedgerConfig  # noqa: E402
from objective_ledger.counter import ManualCounter  # noqa: E402
from objective_ledger.ledger import ObjectiveLedger  # noqa: E402
from objective_ledger.store import LedgerStore  # noqa: E402


@pytest.fixture
def counter():
    return ManualCounter(start=500)


@pytest.fixture
def ledger(counter):
    return ObjectiveLedger(
        store=LedgerStore(),
        counter=counter,
        cfg=LedgerConfig(COUNTER_MODE="manual"),
    )
