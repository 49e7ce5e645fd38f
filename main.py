import os
import sys
from pathlib import Path

import uvicorn

# Add project root to path
PROJECT_ROOT = Path(__file__).parent
sys.path.insert(0, str(PROJECT_ROOT))

from objective_ledger.config_manager import config
from objective_ledger.exceptions import LedgerError
from objective_ledger.logger import get_logger, setup_logging
from objective_ledger.paths import DATA_DIR
from objective_ledger.store import LedgerStore

logger = get_logger("main")


def preflight() -> bool:
    """
    启动前检查：持久化的 ledger 必须可读，否则拒绝启动，
    避免服务在损坏的数据上运行。
    """
    store_path = DATA_DIR / config.STORE_FILENAME if config.PERSIST_STORE else None
    try:
        store = LedgerStore(path=store_path)
    except LedgerError as exc:
        logger.error("Refusing to start: %s", exc.get_user_message())
        return False

    logger.warning(
        "Objective Ledger starting: store=%s, participants=%d, counter=%s, cascade=%s",
        store_path or "memory",
        len(store.participants()),
        config.COUNTER_MODE,
        config.CASCADE_ON_TERMINATE,
    )
    return True


def main():
    """Main entry point for the Objective Ledger web service."""
    setup_logging()
    if not preflight():
        sys.exit(1)

    reload_enabled = os.getenv("OBJECTIVE_LEDGER_RELOAD", "0").lower() in {"1", "true", "yes"}
    host = os.getenv("OBJECTIVE_LEDGER_HOST", "0.0.0.0")
    port = int(os.getenv("OBJECTIVE_LEDGER_PORT", "8010"))

    uvicorn.run(
        "web.backend.app:app",
        host=host,
        port=port,
        reload=reload_enabled,
        reload_dirs=["web", "objective_ledger"] if reload_enabled else None,
    )


if __name__ == "__main__":
    main()
