"""
工具函数模块

提供通用的工具函数。
"""

from .file_utils import FileUtils
from .logger_utils import LoggerUtils

__all__ = ["FileUtils", "LoggerUtils"]
