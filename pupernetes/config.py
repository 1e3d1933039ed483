"""
配置加载

优先级 (低 → 高): 默认值 < YAML 文件 < 环境变量 (.env 会先被加载进环境)
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, ValidationError, field_validator

from .options.drain import DrainDirectives, resolve
from .run.notify import NOTIFY_SOCKET_ENV, NullNotifier, SystemdNotifier
from .utils.errors import ConfigurationError

logger = logging.getLogger(__name__)

ENV_OVERRIDES = {
    "PUPERNETES_DRAIN": "drain",
    "PUPERNETES_SYSTEMD_NOTIFY": "systemd_notify",
    "PUPERNETES_LOG_LEVEL": "log_level",
    NOTIFY_SOCKET_ENV: "notify_socket",
}

LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class CoreConfig(BaseModel):
    """运行配置"""

    drain: str = "all"
    systemd_notify: bool = True
    notify_socket: Optional[str] = None
    log_level: str = "INFO"

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"未知日志级别 {value!r}, 可选: {', '.join(LOG_LEVELS)}")
        return level

    def drain_directives(self) -> DrainDirectives:
        return resolve(self.drain)

    def build_notifier(self):
        if not self.systemd_notify:
            return NullNotifier()
        return SystemdNotifier(self.notify_socket)


def _read_yaml(path: Path) -> Dict[str, Any]:
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigurationError(f"无法读取配置文件: {e}", field="path", value=path) from e

    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"配置文件不是合法的 YAML: {e}", field="path", value=path) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError("配置文件顶层必须是 mapping", field="path", value=path)
    return data


def load_config(
    path: Optional[Union[str, Path]] = None,
    env: Optional[Mapping[str, str]] = None
) -> CoreConfig:
    """加载配置

    Args:
        path: YAML 配置文件路径 (可选)
        env: 环境变量 (默认 os.environ, 读取前先加载 .env)

    Returns:
        校验后的 CoreConfig

    Raises:
        ConfigurationError: 文件不可读、格式错误或字段校验失败
    """
    if env is None:
        load_dotenv()
        env = os.environ

    data: Dict[str, Any] = {}
    if path:
        data.update(_read_yaml(Path(path)))
        logger.debug("已读取配置文件 %s", path)

    for env_key, field in ENV_OVERRIDES.items():
        value = env.get(env_key)
        if value is not None:
            data[field] = value

    try:
        return CoreConfig(**data)
    except ValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(loc) for loc in first.get("loc", ()))
        raise ConfigurationError(
            f"配置校验失败: {first.get('msg')}",
            field=field or None,
            value=first.get("input"),
        ) from e
