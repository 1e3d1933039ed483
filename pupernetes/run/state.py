"""
集群就绪状态

多个探针 (apiserver / DNS / kubelet) 并发地把结果写入同一个 ReadinessState,
由它汇总出 "集群是否可用" 的唯一信号, 并同步到 Prometheus 和 systemd。

约定:
- 所有字段只在持有读写锁时访问
- 日志和指标都是 setter 调用的同步结果, 没有后台刷新
- ready 是单向锁存, 一旦为 True 不再复位
"""

import logging
from typing import Any, Dict, Optional

from prometheus_client import CollectorRegistry

from ..utils.rwlock import ReadWriteLock
from .metrics import StateMetrics
from .notify import SystemdNotifier

logger = logging.getLogger(__name__)


def _log_if_changed(previous: Any, current: Any, template: str) -> bool:
    """值变化时打印一条日志, 返回是否变化

    探针每隔几秒重试一次, 失败原因往往相同, 只在变化时输出避免刷屏。
    """
    if previous == current:
        return False
    logger.info(template, current)
    return True


class ReadinessState:
    """线程安全的就绪状态

    Example:
        state = ReadinessState()

        # apiserver 探针
        state.set_api_server_probe_last_error("connection refused")

        # kubelet 探针
        state.set_kubelet_api_pod_running(3)

        if not state.is_ready():
            state.set_ready()
    """

    def __init__(
        self,
        registry: Optional[CollectorRegistry] = None,
        notifier: Optional[Any] = None
    ):
        """创建状态并注册指标

        Args:
            registry: Prometheus registry (默认进程全局 REGISTRY)
            notifier: 提供 notify_ready() 的对象 (默认 SystemdNotifier)

        Raises:
            RegistrationError: 指标已在该 registry 上注册过
        """
        self._lock = ReadWriteLock()

        self._ready = False
        self._kubectl_applied = False
        self._api_server_probe_last_error = ""
        self._dns_last_error = ""

        self._kubelet_probe_failures = 0
        self._kubelet_api_pod_running = 0
        self._kubelet_logs_pod_running = 0

        self.notifier = notifier if notifier is not None else SystemdNotifier()

        self.metrics = StateMetrics()
        self.metrics.register(registry)
        self.metrics.version.set(1)

    # === 就绪 ===

    def is_ready(self) -> bool:
        """apiserver 可用且 manifests 已 apply"""
        with self._lock.read_locked():
            return self._ready

    def set_ready(self):
        """标记为就绪, 并通知 systemd

        标志位先于外部通知和指标置位, 并发读者不会看到 "已通知但未就绪" 的状态。
        通知失败会被忽略: 非 systemd 环境下不能阻塞就绪。
        """
        with self._lock.write_locked():
            was_ready = self._ready
            self._ready = True

        if not was_ready:
            logger.info("pupernetes 已就绪")

        try:
            self.notifier.notify_ready()
        except Exception as e:
            logger.debug("忽略 systemd 就绪通知失败: %s", e)

        self.metrics.ready.set(1)

    # === kubectl apply ===

    def set_kubectl_applied(self):
        with self._lock.write_locked():
            self._kubectl_applied = True

    def is_kubectl_applied(self) -> bool:
        with self._lock.read_locked():
            return self._kubectl_applied

    # === 探针错误 ===

    def set_api_server_probe_last_error(self, msg: str):
        """记录 apiserver 探针最近一次错误, 仅在内容变化时打印"""
        with self._lock.write_locked():
            if _log_if_changed(
                self._api_server_probe_last_error, msg,
                "Kubernetes apiserver 尚未就绪: %s",
            ):
                self._api_server_probe_last_error = msg

    def get_api_server_probe_last_error(self) -> str:
        with self._lock.read_locked():
            return self._api_server_probe_last_error

    def set_dns_last_error(self, msg: str):
        """记录 DNS 最近一次错误, 仅在内容变化时打印

        失败计数按调用次数累加, 与消息是否变化无关
        """
        with self._lock.write_locked():
            if _log_if_changed(
                self._dns_last_error, msg,
                "Kubernetes DNS 尚未就绪: %s",
            ):
                self._dns_last_error = msg
        self.metrics.dns_failures.inc()

    def get_dns_last_error(self) -> str:
        with self._lock.read_locked():
            return self._dns_last_error

    # === kubelet ===

    def inc_kubelet_probe_failures(self):
        with self._lock.write_locked():
            self._kubelet_probe_failures += 1
        self.metrics.kubelet_probe_failures.inc()

    def get_kubelet_probe_failures(self) -> int:
        with self._lock.read_locked():
            return self._kubelet_probe_failures

    get_kubelet_probe_fail = get_kubelet_probe_failures

    def set_kubelet_api_pod_running(self, nb: int):
        """记录 kubelet API 报告的运行中 Pod 数

        日志只在变化时输出, 指标每次都更新
        """
        with self._lock.write_locked():
            if _log_if_changed(
                self._kubelet_api_pod_running, nb,
                "Kubelet API 报告 %d 个运行中的 Pod",
            ):
                self._kubelet_api_pod_running = nb
        self.metrics.kubelet_api_pods_running.set(nb)

    def get_kubelet_api_pod_running(self) -> int:
        with self._lock.read_locked():
            return self._kubelet_api_pod_running

    def set_kubelet_logs_pod_running(self, nb: int):
        """记录 /var/log/pods 下的运行中 Pod 数

        日志只在变化时输出, 指标每次都更新
        """
        with self._lock.write_locked():
            if _log_if_changed(
                self._kubelet_logs_pod_running, nb,
                "Kubelet 日志目录报告 %d 个运行中的 Pod",
            ):
                self._kubelet_logs_pod_running = nb
        self.metrics.kubelet_logs_pods_running.set(nb)

    def get_kubelet_logs_pod_running(self) -> int:
        with self._lock.read_locked():
            return self._kubelet_logs_pod_running

    # === 汇总 ===

    def snapshot(self) -> Dict[str, Any]:
        """一次性读取全部字段

        Returns:
            {
                "ready": 是否就绪,
                "kubectl_applied": 是否已 apply,
                "api_server_probe_last_error": apiserver 最近错误,
                "dns_last_error": DNS 最近错误,
                "kubelet_probe_failures": kubelet 探针失败次数,
                "kubelet_api_pod_running": kubelet API 报告的 Pod 数,
                "kubelet_logs_pod_running": 日志目录报告的 Pod 数
            }
        """
        with self._lock.read_locked():
            return {
                "ready": self._ready,
                "kubectl_applied": self._kubectl_applied,
                "api_server_probe_last_error": self._api_server_probe_last_error,
                "dns_last_error": self._dns_last_error,
                "kubelet_probe_failures": self._kubelet_probe_failures,
                "kubelet_api_pod_running": self._kubelet_api_pod_running,
                "kubelet_logs_pod_running": self._kubelet_logs_pod_running,
            }

    def __repr__(self) -> str:
        snap = self.snapshot()
        return (
            f"ReadinessState(ready={snap['ready']}, "
            f"kubectl_applied={snap['kubectl_applied']}, "
            f"kubelet_probe_failures={snap['kubelet_probe_failures']})"
        )


def new_state(
    registry: Optional[CollectorRegistry] = None,
    notifier: Optional[Any] = None
) -> ReadinessState:
    """创建状态对象, 每个 registry 只能调用一次

    Raises:
        RegistrationError: 指标已注册
    """
    return ReadinessState(registry=registry, notifier=notifier)
