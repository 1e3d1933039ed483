#!/usr/bin/env python3
"""
测试 systemd 就绪通知
"""

import socket
import tempfile
import os

import pytest

from pupernetes.run.notify import NOTIFY_SOCKET_ENV, NullNotifier, SystemdNotifier
from pupernetes.utils.errors import NotifyError, PupernetesErrorCode


requires_unix_socket = pytest.mark.skipif(
    not hasattr(socket, "AF_UNIX"), reason="需要 unix socket"
)


@pytest.fixture
def notify_socket():
    """模拟 systemd 的 notify socket"""
    # 使用短路径, 避免超过 sun_path 长度限制
    tmpdir = tempfile.mkdtemp(prefix="sdn")
    path = os.path.join(tmpdir, "notify.sock")
    sock = socket.socket(socket.AF_UNIX, socket.SOCK_DGRAM)
    sock.bind(path)
    sock.settimeout(2)
    try:
        yield sock, path
    finally:
        sock.close()
        os.unlink(path)
        os.rmdir(tmpdir)


def test_no_socket_configured(monkeypatch):
    """非 systemd 环境"""
    monkeypatch.delenv(NOTIFY_SOCKET_ENV, raising=False)
    notifier = SystemdNotifier()

    assert notifier.socket_path is None
    assert notifier.notify_ready() is False


def test_socket_path_from_env(monkeypatch):
    monkeypatch.setenv(NOTIFY_SOCKET_ENV, "/run/systemd/notify")

    assert SystemdNotifier().socket_path == "/run/systemd/notify"
    assert SystemdNotifier("/tmp/other").socket_path == "/tmp/other"


@requires_unix_socket
def test_notify_ready_sends_datagram(notify_socket):
    sock, path = notify_socket
    notifier = SystemdNotifier(path)

    assert notifier.notify_ready() is True
    assert sock.recv(64) == b"READY=1"


@requires_unix_socket
def test_notify_status(notify_socket):
    sock, path = notify_socket

    assert SystemdNotifier(path).notify_status("apiserver ready") is True
    assert sock.recv(64) == b"STATUS=apiserver ready"


@requires_unix_socket
def test_missing_socket_raises():
    """socket 不存在时抛出 NotifyError"""
    notifier = SystemdNotifier("/nonexistent/pupernetes/notify.sock")

    with pytest.raises(NotifyError) as exc_info:
        notifier.notify_ready()

    assert exc_info.value.code is PupernetesErrorCode.NOTIFY_FAILED
    assert exc_info.value.details["socket"] == "/nonexistent/pupernetes/notify.sock"


def test_abstract_socket_address():
    assert SystemdNotifier("@pupernetes/notify")._address() == "\0pupernetes/notify"


def test_null_notifier():
    notifier = NullNotifier()

    assert notifier.notify_ready() is False
    assert notifier.notify_status("x") is False
