"""
pupernetes 错误类型定义

运行期的 setter 与解析器都不抛异常, 这里只覆盖启动阶段和外部通知的失败
"""

from enum import Enum
from typing import Dict, Any, Optional


class PupernetesErrorCode(Enum):
    """错误码枚举"""

    # 指标注册冲突 (构造阶段)
    METRIC_ALREADY_REGISTERED = "METRIC_ALREADY_REGISTERED"

    # 配置类错误
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"

    # systemd 通知失败
    NOTIFY_FAILED = "NOTIFY_FAILED"

    # 未知错误
    UNKNOWN = "UNKNOWN"


class PupernetesError(Exception):
    """pupernetes 异常基类

    Attributes:
        message: 错误消息
        code: 错误码
        details: 额外的错误详情
    """

    def __init__(
        self,
        message: str,
        code: PupernetesErrorCode = PupernetesErrorCode.UNKNOWN,
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """转换为字典格式"""
        return {
            "error": self.message,
            "code": self.code.value,
            "details": self.details
        }

    def __str__(self) -> str:
        if self.details:
            details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"[{self.code.value}] {self.message} ({details_str})"
        return f"[{self.code.value}] {self.message}"


class RegistrationError(PupernetesError):
    """指标注册错误

    同一个 registry 上重复构造状态对象时抛出, 属于调用方错误, 不重试
    """

    def __init__(
        self,
        message: str,
        metric_name: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        all_details = details or {}
        if metric_name:
            all_details["metric"] = metric_name

        super().__init__(message, PupernetesErrorCode.METRIC_ALREADY_REGISTERED, all_details)


class ConfigurationError(PupernetesError):
    """配置错误

    配置文件无法读取、格式错误或字段校验失败
    """

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        value: Optional[Any] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        all_details = details or {}
        if field:
            all_details["field"] = field
        if value is not None:
            all_details["value"] = str(value)

        super().__init__(message, PupernetesErrorCode.CONFIGURATION_ERROR, all_details)


class NotifyError(PupernetesError):
    """systemd 就绪通知发送失败"""

    def __init__(
        self,
        message: str,
        socket_path: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        all_details = details or {}
        if socket_path:
            all_details["socket"] = socket_path

        super().__init__(message, PupernetesErrorCode.NOTIFY_FAILED, all_details)
