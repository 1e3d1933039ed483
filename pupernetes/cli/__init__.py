"""
命令行入口
"""

from .main import main

__all__ = ["main"]
