import main
from objective_ledger.config_manager import config
from objective_ledger.models import ObjectiveRecord
from objective_ledger.store import LedgerStore


def test_preflight_accepts_readable_store(tmp_path, monkeypatch):
    monkeypatch.setattr(main, "DATA_DIR", tmp_path)
    store = LedgerStore(path=tmp_path / config.STORE_FILENAME)
    store.put_objective("alice", ObjectiveRecord(description="Goal"))
    store.save()

    assert main.preflight() is True


def test_preflight_accepts_missing_store(tmp_path, monkeypatch):
    monkeypatch.setattr(main, "DATA_DIR", tmp_path)
    assert main.preflight() is True


def test_preflight_refuses_corrupt_store(tmp_path, monkeypatch):
    monkeypatch.setattr(main, "DATA_DIR", tmp_path)
    (tmp_path / config.STORE_FILENAME).write_text("{broken", encoding="utf-8")

    assert main.preflight() is False
