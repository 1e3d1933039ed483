"""
日志初始化

库代码只通过 logging.getLogger(__name__) 打日志, handler 只在 CLI 入口安装
"""

import logging
from typing import Optional, Union

from rich.console import Console
from rich.logging import RichHandler


def setup_logging(level: Union[int, str] = "INFO", console: Optional[Console] = None) -> None:
    """在 root logger 上安装 RichHandler

    Args:
        level: 日志级别 (名称或数值)
        console: 输出用的 rich Console (默认 stderr)
    """
    if isinstance(level, str):
        level = level.upper()

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[handler],
        force=True,
    )
