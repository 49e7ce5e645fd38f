"""
Configuration Manager for Objective Ledger.

集中管理运行时参数。记录约束（描述长度、权重范围）是数据不变量，
定义在 objective_ledger.models 中，不在此处配置。

使用方式:
    from objective_ledger.config_manager import config
    mode = config.COUNTER_MODE
"""
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from objective_ledger.exceptions import ConfigError
from objective_ledger.paths import get_config_path

COUNTER_MODES = ("clock", "manual")


@dataclass
class LedgerConfig:
    """
    Ledger 运行时配置。

    所有值均有默认值，可由 runtime.yaml 覆盖。
    """

    # === 存储 ===

    # 是否把 ledger 持久化到 DATA_DIR 下的 JSON 文件
    # 关闭后仅保存在内存中（进程退出即丢失）
    PERSIST_STORE: bool = True

    # 持久化文件名
    STORE_FILENAME: str = "objective_ledger.json"

    # 终止目标时是否级联删除 priority / temporal 记录
    # 默认关闭：保留原有行为，孤儿记录可用 tools/check_store.py 清理
    CASCADE_ON_TERMINATE: bool = False

    # === 计数器 ===

    # "clock": 按墙钟推导区块高度；"manual": 手动推进（测试/CLI）
    COUNTER_MODE: str = "clock"

    # manual 模式的起始高度
    COUNTER_START: int = 0

    # clock 模式下每个区块的秒数
    # 经验值依据：与 Stacks/Bitcoin 出块间隔 (~10 分钟) 对齐
    BLOCK_INTERVAL_SECONDS: int = 600

    def __post_init__(self):
        if self.COUNTER_MODE not in COUNTER_MODES:
            raise ConfigError(
                f"COUNTER_MODE must be one of {COUNTER_MODES}, got {self.COUNTER_MODE!r}"
            )
        if self.BLOCK_INTERVAL_SECONDS <= 0:
            raise ConfigError("BLOCK_INTERVAL_SECONDS must be positive")
        if self.COUNTER_START < 0:
            raise ConfigError("COUNTER_START must not be negative")


def _load_runtime_config(path: Path) -> Dict[str, Any]:
    """加载运行时配置覆盖（如果存在）。"""
    if not path.exists():
        return {}

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML: {exc}", config_path=str(path)) from exc
    except OSError as exc:
        raise ConfigError(f"Cannot read config: {exc}", config_path=str(path)) from exc

    if not isinstance(data, dict):
        raise ConfigError("Top-level config must be a mapping", config_path=str(path))
    return data


def get_config(path: Optional[Path] = None) -> LedgerConfig:
    """
    获取 ledger 配置实例。

    优先级：runtime.yaml > 默认值
    """
    overrides = _load_runtime_config(path if path is not None else get_config_path())
    known = {f.name for f in fields(LedgerConfig)}
    return LedgerConfig(**{k: v for k, v in overrides.items() if k in known})


# 全局配置实例（单例模式）
config = get_config()
