"""
工具模块
"""

from .errors import (
    PupernetesError,
    PupernetesErrorCode,
    RegistrationError,
    ConfigurationError,
    NotifyError,
)
from .rwlock import ReadWriteLock
from .logging import setup_logging

__all__ = [
    "PupernetesError",
    "PupernetesErrorCode",
    "RegistrationError",
    "ConfigurationError",
    "NotifyError",
    "ReadWriteLock",
    "setup_logging",
]
