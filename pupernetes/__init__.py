"""
pupernetes-core

单节点集群启动工具的核心部分:
- 就绪状态跟踪 (并发探针 → 就绪锁存 + Prometheus 指标 + systemd 通知)
- drain 选项解析
"""

from .run import ReadinessState, new_state, SystemdNotifier, NullNotifier
from .options import DrainDirectives, DrainTarget, resolve, new_drain_options
from .utils import PupernetesError, RegistrationError, ConfigurationError, NotifyError

__version__ = "0.1.0"

__all__ = [
    "ReadinessState",
    "new_state",
    "SystemdNotifier",
    "NullNotifier",
    "DrainDirectives",
    "DrainTarget",
    "resolve",
    "new_drain_options",
    "PupernetesError",
    "RegistrationError",
    "ConfigurationError",
    "NotifyError",
]
