import pytest

from objective_ledger.config_manager import LedgerConfig
from objective_ledger.counter import ClockCounter, ManualCounter, build_counter


def test_manual_counter_advances_forward_only():
    counter = ManualCounter(start=7)
    assert counter.current() == 7
    assert counter.advance() == 8
    assert counter.advance(12) == 20

    with pytest.raises(ValueError):
        counter.advance(0)
    with pytest.raises(ValueError):
        ManualCounter(start=-1)


def test_clock_counter_derives_height_from_interval():
    now = [6000.0]
    counter = ClockCounter(interval_seconds=600, clock=lambda: now[0])
    assert counter.current() == 10

    now[0] = 6599.0
    assert counter.current() == 10
    now[0] = 6600.0
    assert counter.current() == 11


def test_clock_counter_never_goes_backwards():
    now = [12000.0]
    counter = ClockCounter(interval_seconds=600, clock=lambda: now[0])
    assert counter.current() == 20

    now[0] = 3000.0
    assert counter.current() == 20


def test_build_counter_follows_config():
    manual = build_counter(LedgerConfig(COUNTER_MODE="manual", COUNTER_START=500))
    assert isinstance(manual, ManualCounter)
    assert manual.current() == 500

    clock = build_counter(LedgerConfig(COUNTER_MODE="clock", BLOCK_INTERVAL_SECONDS=60))
    assert isinstance(clock, ClockCounter)
