"""
停机时的 drain 选项

--drain 接受逗号分隔的 token: all, none, pods, kubeletgc, iptables
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict

from .common import Selection, resolve_selection


class DrainTarget(str, Enum):
    """drain 目标枚举"""
    PODS = "pods"
    KUBELET_GC = "kubeletgc"
    IPTABLES = "iptables"


DRAIN_TARGETS = tuple(target.value for target in DrainTarget)


@dataclass(frozen=True)
class DrainDirectives(Selection):
    """停机时需要 drain 的资源"""

    @property
    def all(self) -> bool:
        return self.wildcard_all

    @property
    def none(self) -> bool:
        return self.wildcard_none

    @property
    def pods(self) -> bool:
        return self.is_enabled(DrainTarget.PODS.value)

    @property
    def kubelet_gc(self) -> bool:
        return self.is_enabled(DrainTarget.KUBELET_GC.value)

    @property
    def iptables(self) -> bool:
        return self.is_enabled(DrainTarget.IPTABLES.value)

    def as_dict(self) -> Dict[str, bool]:
        return super().as_dict(DRAIN_TARGETS)


def resolve(value: str) -> DrainDirectives:
    """解析 drain 选项串

    Example:
        resolve("pods").pods          # True
        resolve("none,pods").pods     # False, "none" 覆盖单个目标
        resolve("none,all").all       # True, 后出现的通配 token 胜出
    """
    return resolve_selection(value, DRAIN_TARGETS, DrainDirectives)


new_drain_options = resolve
