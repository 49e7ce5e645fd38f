"""
Centralized filesystem paths for runtime data.
"""
import os
from pathlib import Path

PROJECT_ROOT = Path(__file__).parent.parent


def _dir_from_env(var: str, default: Path) -> Path:
    raw = os.getenv(var, "").strip()
    if raw:
        return Path(raw).expanduser()
    return default


def get_data_dir() -> Path:
    """
    Return runtime data directory.

    Priority:
    1. OBJECTIVE_LEDGER_DATA_DIR env var
    2. <project_root>/data
    """
    return _dir_from_env("OBJECTIVE_LEDGER_DATA_DIR", PROJECT_ROOT / "data")


def get_logs_dir() -> Path:
    return _dir_from_env("OBJECTIVE_LEDGER_LOGS_DIR", PROJECT_ROOT / "logs")


def get_config_path() -> Path:
    return _dir_from_env("OBJECTIVE_LEDGER_CONFIG", PROJECT_ROOT / "config" / "runtime.yaml")


DATA_DIR = get_data_dir()
LOGS_DIR = get_logs_dir()
