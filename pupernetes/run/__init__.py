"""
运行期模块 - 就绪状态、指标与 systemd 通知
"""

from .state import ReadinessState, new_state
from .metrics import StateMetrics, METRIC_PREFIX
from .notify import SystemdNotifier, NullNotifier, NOTIFY_SOCKET_ENV

__all__ = [
    # 状态
    "ReadinessState",
    "new_state",
    # 指标
    "StateMetrics",
    "METRIC_PREFIX",
    # 通知
    "SystemdNotifier",
    "NullNotifier",
    "NOTIFY_SOCKET_ENV",
]
