"""
Objective Ledger 异常定义模块。

定义系统中所有自定义异常的层次结构：
- LedgerError: 基类，所有已知错误
- EntityMissing: 目标记录不存在
- InvalidInput: 输入值违反约束
- RecordExists: 目标记录已存在
- ConfigError: 配置文件错误
- StateError: 持久化状态损坏
"""
from typing import Optional


class LedgerError(Exception):
    """Objective Ledger 基础异常类。

    所有系统内已知错误都继承自此类。
    code 与 http_status 为类级常量，供 API 与 CLI 统一映射。
    """

    code = "ERR_LEDGER"
    http_status = 500

    def __init__(self, message: str, hint: Optional[str] = None):
        """
        Args:
            message: 错误描述
            hint: 对调用方的操作建议
        """
        super().__init__(message)
        self.message = message
        self.hint = hint

    def get_user_message(self) -> str:
        """返回用户友好的错误消息。"""
        if self.hint:
            return f"{self.message}\n💡 hint: {self.hint}"
        return self.message

    def to_dict(self) -> dict:
        return {"code": self.code, "message": self.message}


class EntityMissing(LedgerError):
    """操作需要已存在的目标记录，但该参与者没有。"""

    code = "ERR_ENTITY_MISSING"
    http_status = 404

    def __init__(self, participant: str):
        super().__init__(
            f"No objective registered for participant '{participant}'",
            hint="Register an objective first",
        )
        self.participant = participant


class InvalidInput(LedgerError):
    """输入值违反约束（空描述、权重越界、非正时长、非法布尔值）。"""

    code = "ERR_INVALID_INPUT"
    http_status = 400

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field

    def to_dict(self) -> dict:
        payload = super().to_dict()
        if self.field:
            payload["field"] = self.field
        return payload


class RecordExists(LedgerError):
    """操作要求记录不存在（注册、委派），但记录已存在。"""

    code = "ERR_RECORD_EXISTS"
    http_status = 409

    def __init__(self, participant: str):
        super().__init__(
            f"Participant '{participant}' already has an objective",
            hint="Modify or terminate the existing objective instead",
        )
        self.participant = participant


class ConfigError(LedgerError):
    """配置文件错误。

    当配置文件格式错误或内容非法时抛出。
    """

    code = "ERR_CONFIG"

    def __init__(self, message: str, config_path: Optional[str] = None):
        super().__init__(message)
        self.hint = f"请检查配置文件: {config_path}" if config_path else "请检查配置文件格式"
        self.config_path = config_path


class StateError(LedgerError):
    """状态相关错误。

    当持久化的 ledger 文件无法解析时抛出。
    """

    code = "ERR_STATE"

    def __init__(self, message: str, store_path: Optional[str] = None):
        super().__init__(message, hint="状态可能已损坏，建议运行 tools/check_store.py")
        self.store_path = store_path
