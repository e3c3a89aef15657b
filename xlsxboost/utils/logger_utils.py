"""
日志工具

提供日志配置和管理的工具函数。
"""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import Optional

import colorama
from colorama import Fore, Style

from ..config.environment import get_settings


class LoggerUtils:
    """日志工具类"""

    @staticmethod
    def _get_log_directory(log_dir: str) -> str:
        """
        获取日志目录路径，优先使用当前工作目录，否则使用用户主目录

        Args:
            log_dir: 日志目录名称

        Returns:
            str: 日志目录的绝对路径
        """
        preferred_log_dir = os.path.join(os.getcwd(), log_dir)

        # 测试是否有写入权限
        try:
            os.makedirs(preferred_log_dir, exist_ok=True)
            test_file = os.path.join(preferred_log_dir, ".write_test")
            with open(test_file, "w") as f:
                f.write("test")
            os.remove(test_file)
            return preferred_log_dir
        except OSError:
            home_dir = os.path.expanduser("~")
            fallback_log_dir = os.path.join(home_dir, ".xlsxboost", log_dir)
            os.makedirs(fallback_log_dir, exist_ok=True)
            return fallback_log_dir

    @staticmethod
    def setup_logging(
        log_level: Optional[str] = None,
        log_dir: str = "logs",
        log_file: str = "xlsxboost.log",
        quiet_console: bool = True,
        max_bytes: int = 10 * 1024 * 1024,  # 10MB
        backup_count: int = 5,
    ):
        """
        设置日志配置

        Args:
            log_level: 日志级别，默认取设置中的 log_level
            log_dir: 日志目录名称（相对路径）
            log_file: 日志文件名
            quiet_console: 控制台是否只显示 WARNING 及以上级别
            max_bytes: 单个日志文件最大字节数（默认10MB）
            backup_count: 保留的备份文件数量（默认5个）
        """
        if log_level is None:
            log_level = get_settings(fields=("log_level",)).log_level
        actual_log_dir = LoggerUtils._get_log_directory(log_dir)

        # 文件使用详细格式，控制台使用简洁彩色格式
        file_formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )
        console_formatter = ColoredFormatter("%(levelname)s: %(message)s")

        root_logger = logging.getLogger()
        for handler in root_logger.handlers[:]:
            root_logger.removeHandler(handler)

        level = getattr(logging, log_level.upper(), logging.INFO)
        root_logger.setLevel(level)

        file_handler = RotatingFileHandler(
            os.path.join(actual_log_dir, log_file),
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
        )
        file_handler.setFormatter(file_formatter)
        file_handler.setLevel(level)
        root_logger.addHandler(file_handler)

        # Windows 控制台颜色兼容
        colorama.just_fix_windows_console()
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(console_formatter)
        console_handler.setLevel(logging.WARNING if quiet_console else level)
        root_logger.addHandler(console_handler)

        logging.info(
            f"日志系统已初始化：目录={actual_log_dir}, 级别={log_level}, 最大={max_bytes/1024/1024:.1f}MB, 备份={backup_count}"
        )

    @staticmethod
    def get_logger(name: str) -> logging.Logger:
        """
        获取指定名称的日志器

        Args:
            name: 日志器名称

        Returns:
            logging.Logger: 日志器实例
        """
        return logging.getLogger(name)

    @staticmethod
    def set_log_level(level: str):
        """
        设置根日志器及其处理器的日志级别

        Args:
            level: 日志级别 (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        """
        log_level = getattr(logging, level.upper(), logging.INFO)
        root_logger = logging.getLogger()
        root_logger.setLevel(log_level)
        for handler in root_logger.handlers:
            if isinstance(handler, logging.FileHandler):
                handler.setLevel(log_level)
        logging.info(f"日志级别已设置为: {level}")

    @staticmethod
    def log_system_info():
        """记录系统信息"""
        import platform

        logging.info("=== 系统信息 ===")
        logging.info(f"操作系统: {platform.system()} {platform.release()}")
        logging.info(f"Python 版本: {sys.version}")
        logging.info(f"Python 可执行文件: {sys.executable}")

    @staticmethod
    def log_package_info():
        """记录关键包版本信息"""
        try:
            import matplotlib
            import openpyxl

            logging.info("=== 包版本信息 ===")
            logging.info(f"openpyxl: {openpyxl.__version__}")
            logging.info(f"matplotlib: {matplotlib.__version__}")
        except ImportError as e:
            logging.warning(f"无法获取包版本信息: {e}")


class ColoredFormatter(logging.Formatter):
    """彩色日志格式化器"""

    COLORS = {
        "DEBUG": Fore.CYAN,
        "INFO": Fore.GREEN,
        "WARNING": Fore.YELLOW,
        "ERROR": Fore.RED,
        "CRITICAL": Fore.MAGENTA,
    }

    def format(self, record):
        """格式化日志记录"""
        color = self.COLORS.get(record.levelname)
        if color is None:
            return super().format(record)

        # 格式化后恢复 levelname，避免颜色码写入文件日志
        original = record.levelname
        record.levelname = f"{color}{original}{Style.RESET_ALL}"
        try:
            return super().format(record)
        finally:
            record.levelname = original
