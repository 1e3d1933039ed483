"""
状态相关的 Prometheus 指标

指标先以 registry=None 创建, 再逐个注册到目标 registry, 以便在冲突时回滚
"""

import logging
from typing import List, Optional

from prometheus_client import REGISTRY, CollectorRegistry, Counter, Gauge

from ..utils.errors import RegistrationError

logger = logging.getLogger(__name__)

METRIC_PREFIX = "pupernetes"


class StateMetrics:
    """ReadinessState 持有的六个指标"""

    def __init__(self):
        self.version = Gauge(
            f"{METRIC_PREFIX}_version",
            "Pupernetes version",
            registry=None,
        )
        self.ready = Gauge(
            f"{METRIC_PREFIX}_ready",
            "Boolean for pupernetes readiness",
            registry=None,
        )
        self.kubelet_api_pods_running = Gauge(
            f"{METRIC_PREFIX}_kubelet_api_pods_running",
            "Number of kubelet API pods running",
            registry=None,
        )
        self.kubelet_logs_pods_running = Gauge(
            f"{METRIC_PREFIX}_kubelet_logs_pods_running",
            "Number of kubelet logs pods running",
            registry=None,
        )
        self.kubelet_probe_failures = Counter(
            f"{METRIC_PREFIX}_kubelet_probe_failures",
            "Total number of kubelet probe failures",
            registry=None,
        )
        self.dns_failures = Counter(
            f"{METRIC_PREFIX}_dns_failures",
            "Total number of dns query failures",
            registry=None,
        )

    def collectors(self) -> List[object]:
        return [
            self.version,
            self.ready,
            self.kubelet_api_pods_running,
            self.kubelet_logs_pods_running,
            self.kubelet_probe_failures,
            self.dns_failures,
        ]

    def register(self, registry: Optional[CollectorRegistry] = None) -> None:
        """注册全部指标

        Args:
            registry: 目标 registry (默认进程全局 REGISTRY)

        Raises:
            RegistrationError: 任一指标已被注册; 此前注册成功的指标会被撤销
        """
        registry = registry if registry is not None else REGISTRY
        registered = []

        for collector in self.collectors():
            try:
                registry.register(collector)
            except ValueError as e:
                for done in reversed(registered):
                    registry.unregister(done)
                name = getattr(collector, "_name", None)
                raise RegistrationError(
                    f"指标已注册: {e}",
                    metric_name=name,
                ) from e
            registered.append(collector)

        logger.debug("已注册 %d 个指标", len(registered))
