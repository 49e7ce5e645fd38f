import json

from objective_ledger.models import ObjectiveRecord, PriorityRecord, TemporalRecord
from objective_ledger.store import LedgerStore
from tools.check_store import check_store, find_violations


def test_clean_store_passes(tmp_path):
    path = tmp_path / "ledger.json"
    store = LedgerStore(path=path)
    store.put_objective("alice", ObjectiveRecord(description="Goal"))
    store.put_priority("alice", PriorityRecord(weight=2))
    store.save()

    assert check_store(path) == 0


def test_missing_store_is_not_an_error(tmp_path):
    assert check_store(tmp_path / "absent.json") == 0


def test_invariant_violations_fail(tmp_path):
    path = tmp_path / "ledger.json"
    path.write_text(
        json.dumps(
            {
                "objectives": {"alice": {"description": "", "completed": False}},
                "priorities": {"alice": {"weight": 7}},
            }
        ),
        encoding="utf-8",
    )

    problems = find_violations(LedgerStore(path=path))
    assert len(problems) == 2
    assert check_store(path) == 1


def test_orphans_fail_only_in_strict_mode_and_can_be_pruned(tmp_path):
    path = tmp_path / "ledger.json"
    store = LedgerStore(path=path)
    store.put_temporal("bob", TemporalRecord(deadline=10))
    store.save()

    assert check_store(path) == 0
    assert check_store(path, strict=True) == 1

    assert check_store(path, prune=True) == 0
    assert LedgerStore(path=path).get_temporal("bob") is None


def test_unreadable_store_fails(tmp_path):
    path = tmp_path / "ledger.json"
    path.write_text("{broken", encoding="utf-8")

    assert check_store(path) == 1
