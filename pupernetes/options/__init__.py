"""
选项解析模块
"""

from .common import (
    ALL,
    NONE,
    Selection,
    split_tokens,
    winning_wildcard,
    resolve_selection,
)
from .drain import (
    DrainTarget,
    DrainDirectives,
    DRAIN_TARGETS,
    resolve,
    new_drain_options,
)

__all__ = [
    # 通用
    "ALL",
    "NONE",
    "Selection",
    "split_tokens",
    "winning_wildcard",
    "resolve_selection",
    # drain
    "DrainTarget",
    "DrainDirectives",
    "DRAIN_TARGETS",
    "resolve",
    "new_drain_options",
]
