"""
逗号分隔选项串的通用解析

"all" / "none" 是通配 token, 一次性决定全部目标; 其余 token 各自开启一个目标。
通配结果是最终结果, 不与单个目标 token 合并, 也不受它们的先后顺序影响。
"""

from dataclasses import dataclass
from typing import Callable, Dict, FrozenSet, Iterable, List, Optional, TypeVar

ALL = "all"
NONE = "none"
SEPARATOR = ","


@dataclass(frozen=True)
class Selection:
    """解析结果

    Attributes:
        wildcard_all: "all" 胜出
        wildcard_none: "none" 胜出
        enabled: 开启的目标名集合
    """

    wildcard_all: bool = False
    wildcard_none: bool = False
    enabled: FrozenSet[str] = frozenset()

    def is_enabled(self, target: str) -> bool:
        return target in self.enabled

    def as_dict(self, targets: Iterable[str]) -> Dict[str, bool]:
        """按给定目标顺序展开为 {目标: 是否开启}, 附带两个通配标志"""
        result = {ALL: self.wildcard_all, NONE: self.wildcard_none}
        for target in targets:
            result[target] = self.is_enabled(target)
        return result


S = TypeVar("S", bound=Selection)


def split_tokens(value: str) -> List[str]:
    """按逗号切分, token 原样比较, 不做空白处理"""
    return value.split(SEPARATOR)


def winning_wildcard(tokens: List[str]) -> Optional[str]:
    """返回最后出现位置更靠后的通配 token, 都未出现时返回 None"""
    last_all = -1
    last_none = -1
    for i, token in enumerate(tokens):
        if token == ALL:
            last_all = i
        elif token == NONE:
            last_none = i

    if last_all < 0 and last_none < 0:
        return None
    return ALL if last_all > last_none else NONE


def resolve_selection(
    value: str,
    targets: Iterable[str],
    factory: Callable[..., S] = Selection
) -> S:
    """解析选项串, 不会失败

    Args:
        value: 如 "pods,iptables" / "all" / "none,pods"
        targets: 可识别的目标名
        factory: 结果类型 (Selection 或其子类)

    Returns:
        空串或全部不可识别时, 所有标志均为 False
    """
    known = tuple(targets)
    tokens = split_tokens(value)

    wildcard = winning_wildcard(tokens)
    if wildcard == ALL:
        return factory(wildcard_all=True, wildcard_none=False, enabled=frozenset(known))
    if wildcard == NONE:
        return factory(wildcard_all=False, wildcard_none=True, enabled=frozenset())

    return factory(enabled=frozenset(t for t in tokens if t in known))
