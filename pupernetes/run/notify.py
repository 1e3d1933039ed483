"""
systemd 就绪通知

通过 $NOTIFY_SOCKET 指向的 unix datagram socket 发送 sd_notify 消息。
没有配置 socket 时 (非 systemd 环境) 直接返回 False。
"""

import logging
import os
import socket
from typing import Optional

from ..utils.errors import NotifyError

logger = logging.getLogger(__name__)

NOTIFY_SOCKET_ENV = "NOTIFY_SOCKET"
READY = "READY=1"


class SystemdNotifier:
    """sd_notify 客户端

    Example:
        notifier = SystemdNotifier()
        if not notifier.notify_ready():
            print("不在 systemd 下运行")
    """

    def __init__(self, socket_path: Optional[str] = None):
        """
        Args:
            socket_path: socket 路径, 默认读取 $NOTIFY_SOCKET; "@" 开头表示抽象 socket
        """
        self.socket_path = socket_path if socket_path is not None else os.getenv(NOTIFY_SOCKET_ENV)

    def _address(self) -> str:
        if self.socket_path.startswith("@"):
            return "\0" + self.socket_path[1:]
        return self.socket_path

    def notify(self, state: str) -> bool:
        """发送一条通知

        Args:
            state: sd_notify 状态行, 如 "READY=1"

        Returns:
            是否已发送 (未配置 socket 时为 False)

        Raises:
            NotifyError: socket 不可达或发送失败
        """
        if not self.socket_path:
            logger.debug("未设置 %s, 跳过通知: %s", NOTIFY_SOCKET_ENV, state)
            return False

        try:
            with socket.socket(socket.AF_UNIX, socket.SOCK_DGRAM) as sock:
                sock.sendto(state.encode(), self._address())
        except OSError as e:
            raise NotifyError(
                f"发送 systemd 通知失败: {e}",
                socket_path=self.socket_path,
                details={"state": state},
            ) from e

        logger.debug("已发送 systemd 通知: %s", state)
        return True

    def notify_ready(self) -> bool:
        return self.notify(READY)

    def notify_status(self, text: str) -> bool:
        return self.notify(f"STATUS={text}")

    def __repr__(self) -> str:
        return f"SystemdNotifier(socket_path={self.socket_path!r})"


class NullNotifier:
    """不发送任何通知, 用于关闭 systemd 集成的场景"""

    def notify(self, state: str) -> bool:
        return False

    def notify_ready(self) -> bool:
        return False

    def notify_status(self, text: str) -> bool:
        return False
