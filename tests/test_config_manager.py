import logging

import pytest

from objective_ledger.config_manager import LedgerConfig, get_config
from objective_ledger.exceptions import ConfigError
from objective_ledger.logger import get_logger, setup_logging


def test_defaults_without_runtime_file(tmp_path):
    cfg = get_config(tmp_path / "runtime.yaml")

    assert cfg == LedgerConfig()
    assert cfg.CASCADE_ON_TERMINATE is False
    assert cfg.COUNTER_MODE == "clock"


def test_runtime_yaml_overrides_known_keys(tmp_path):
    path = tmp_path / "runtime.yaml"
    path.write_text(
        "COUNTER_MODE: manual\n"
        "COUNTER_START: 500\n"
        "CASCADE_ON_TERMINATE: true\n"
        "UNKNOWN_KEY: ignored\n",
        encoding="utf-8",
    )

    cfg = get_config(path)

    assert cfg.COUNTER_MODE == "manual"
    assert cfg.COUNTER_START == 500
    assert cfg.CASCADE_ON_TERMINATE is True
    assert not hasattr(cfg, "UNKNOWN_KEY")


def test_malformed_yaml_raises_config_error(tmp_path):
    path = tmp_path / "runtime.yaml"
    path.write_text("COUNTER_MODE: [unclosed\n", encoding="utf-8")

    with pytest.raises(ConfigError) as exc_info:
        get_config(path)
    assert exc_info.value.config_path == str(path)


def test_non_mapping_yaml_raises_config_error(tmp_path):
    path = tmp_path / "runtime.yaml"
    path.write_text("- just\n- a list\n", encoding="utf-8")

    with pytest.raises(ConfigError):
        get_config(path)


def test_invalid_values_raise_config_error():
    with pytest.raises(ConfigError):
        LedgerConfig(COUNTER_MODE="sundial")
    with pytest.raises(ConfigError):
        LedgerConfig(BLOCK_INTERVAL_SECONDS=0)


def test_setup_logging_writes_system_log(tmp_path):
    logger = setup_logging(logs_dir=tmp_path)
    try:
        get_logger("ledger").info("hello ledger")
        for handler in logger.handlers:
            handler.flush()

        assert "hello ledger" in (tmp_path / "system.log").read_text(encoding="utf-8")
        assert (tmp_path / "error.log").exists()
    finally:
        for handler in list(logger.handlers):
            handler.close()
        logger.handlers.clear()
        logger.setLevel(logging.NOTSET)
