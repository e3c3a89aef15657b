"""
文件操作工具

提供打开文件、临时文件创建与删除等工具函数。
"""

import logging
import os
import subprocess
import tempfile
from typing import Optional

from ..config.environment import EnvManager, OS_LINUX, OS_MAC, OS_UNIX, OS_WINDOWS
from ..exceptions import FileOpenError, TempFileError, UnsupportedPlatformError

logger = logging.getLogger(__name__)

# 各系统“用默认程序打开”的命令（Windows 使用 os.startfile）
OPEN_COMMANDS = {
    OS_MAC: "open",
    OS_LINUX: "xdg-open",
    OS_UNIX: "xdg-open",
}


class FileUtils:
    """文件操作工具类"""

    @staticmethod
    def ensure_directory_exists(directory: str) -> bool:
        """
        确保目录存在，如果不存在则创建

        Args:
            directory: 目录路径

        Returns:
            bool: 是否成功（目录存在或创建成功）
        """
        if not directory:
            return False

        if os.path.exists(directory):
            return os.path.isdir(directory)

        try:
            os.makedirs(directory, exist_ok=True)
            logger.info(f"创建目录: {directory}")
            return True
        except OSError as e:
            logger.error(f"创建目录失败: {directory}, 错误: {e}")
            return False

    @staticmethod
    def open_file(filename: str, platform: Optional[str] = None) -> str:
        """
        使用系统默认程序打开文件（Excel / LibreOffice 等）

        Args:
            filename: 相对于当前工作目录的文件路径（也接受绝对路径）
            platform: 平台标识，默认使用 sys.platform

        Returns:
            str: 被打开文件的绝对路径

        Raises:
            FileOpenError: 文件不存在或启动程序失败
            UnsupportedPlatformError: 当前系统无法自动打开文件
        """
        if not filename:
            raise FileOpenError("未指定要打开的文件")

        absolute_path = os.path.join(os.getcwd(), filename)
        if not os.path.isfile(absolute_path):
            raise FileOpenError("文件不存在", absolute_path)

        os_family = EnvManager.detect_os_family(platform)
        logger.info(f"打开文件: {absolute_path} ({os_family})")

        try:
            if os_family == OS_WINDOWS:
                os.startfile(absolute_path)  # type: ignore[attr-defined]
            elif os_family in OPEN_COMMANDS:
                subprocess.run([OPEN_COMMANDS[os_family], absolute_path], check=True)
            else:
                raise UnsupportedPlatformError(
                    "当前操作系统不支持自动打开文件", os_family
                )
        except (OSError, subprocess.CalledProcessError) as e:
            raise FileOpenError(f"无法打开文件: {absolute_path}", str(e)) from e

        return absolute_path

    @staticmethod
    def create_temp_file(
        suffix: str = ".png", prefix: str = "plot_", directory: str = ""
    ) -> str:
        """
        创建一个空的临时文件并返回其路径

        Args:
            suffix: 文件后缀
            prefix: 文件名前缀
            directory: 所在目录，空表示系统临时目录

        Returns:
            str: 临时文件路径

        Raises:
            TempFileError: 无法创建临时文件
        """
        if directory and not FileUtils.ensure_directory_exists(directory):
            raise TempFileError("临时目录不可用", directory)

        try:
            fd, path = tempfile.mkstemp(
                suffix=suffix, prefix=prefix, dir=directory or None
            )
        except OSError as e:
            raise TempFileError("创建临时文件失败", str(e)) from e

        os.close(fd)
        logger.debug(f"创建临时文件: {path}")
        return path

    @staticmethod
    def remove_file(file_path: str) -> bool:
        """
        删除文件

        Args:
            file_path: 文件路径

        Returns:
            bool: 是否删除成功（文件不存在返回 False）
        """
        if not os.path.isfile(file_path):
            logger.warning(f"文件不存在，无法删除: {file_path}")
            return False

        try:
            os.remove(file_path)
            logger.debug(f"已删除文件: {file_path}")
            return True
        except OSError as e:
            logger.error(f"删除文件失败: {file_path}, 错误: {e}")
            return False
