"""
运行环境管理

在使用 openpyxl / matplotlib 之前准备进程环境变量，并从环境变量（支持 .env 文件）
读取 xlsxboost 的设置覆盖值。环境变量优先级高于配置文件。
"""

import importlib
import logging
import os
import sys
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Optional

from dotenv import find_dotenv, load_dotenv

from ..exceptions import ConfigError
from .settings import DEFAULT_CONFIG_FILE, Config, Settings

logger = logging.getLogger(__name__)

OS_WINDOWS = "windows"
OS_LINUX = "linux"
OS_MAC = "mac"
OS_UNIX = "unix"
OS_UNKNOWN = "unknown"

BACKEND_VAR = "MPLBACKEND"
CONFIG_HOME_VAR = "MPLCONFIGDIR"
HEADLESS_BACKEND = "Agg"

# 环境变量名 -> (设置字段, 类型)
SETTINGS_ENV_VARS = {
    "XLSXBOOST_DEFAULT_START_COL": ("default_start_col", int),
    "XLSXBOOST_PLOT_WIDTH": ("plot_width", int),
    "XLSXBOOST_PLOT_HEIGHT": ("plot_height", int),
    "XLSXBOOST_PLOT_DPI": ("plot_dpi", int),
    "XLSXBOOST_HEADER_COLOR": ("header_color", str),
    "XLSXBOOST_TEMP_DIR": ("temp_dir", str),
    "XLSXBOOST_LOG_LEVEL": ("log_level", str),
}


@dataclass(frozen=True)
class RuntimeEnvironment:
    """需要应用到进程的运行环境配置"""

    os_family: str
    variables: Dict[str, str] = field(default_factory=dict)
    reset_config_home: bool = False

    @property
    def backend(self) -> Optional[str]:
        """强制使用的 matplotlib 后端，None 表示保持默认"""
        return self.variables.get(BACKEND_VAR)


class EnvManager:
    """环境变量管理器 - 支持环境变量和 .env 文件"""

    def __init__(self, load_env_file: bool = True):
        """
        初始化环境变量管理器

        Args:
            load_env_file: 是否加载当前目录下的 .env 文件
        """
        if load_env_file:
            self.load_environment()

    def load_environment(self):
        """加载环境变量"""
        load_dotenv(find_dotenv(usecwd=True))  # 不覆盖已存在的环境变量

    @staticmethod
    def detect_os_family(platform: Optional[str] = None) -> str:
        """
        检测操作系统类型

        Args:
            platform: 平台标识，默认使用 sys.platform

        Returns:
            str: windows / linux / mac / unix / unknown
        """
        platform = platform or sys.platform
        if platform.startswith("win"):
            return OS_WINDOWS
        if platform.startswith("linux"):
            return OS_LINUX
        if platform == "darwin":
            return OS_MAC
        if platform.startswith(("freebsd", "openbsd", "netbsd", "sunos", "aix")):
            return OS_UNIX
        return OS_UNKNOWN

    @staticmethod
    def _has_display() -> bool:
        return bool(os.getenv("DISPLAY") or os.getenv("WAYLAND_DISPLAY"))

    def build_environment(
        self, reset_config_home: bool = False, platform: Optional[str] = None
    ) -> RuntimeEnvironment:
        """
        计算当前系统需要设置的环境变量，不修改进程状态

        macOS 上的 GUI 后端在后台绘图时容易出问题，因此强制使用 Agg；
        没有显示设备的 Linux/Unix 同样使用 Agg。

        Args:
            reset_config_home: 是否重置 matplotlib 配置目录（MPLCONFIGDIR）
            platform: 平台标识，默认使用 sys.platform

        Returns:
            RuntimeEnvironment: 运行环境配置
        """
        os_family = self.detect_os_family(platform)
        variables: Dict[str, str] = {}

        if os_family == OS_MAC:
            variables[BACKEND_VAR] = HEADLESS_BACKEND
        elif os_family in (OS_LINUX, OS_UNIX) and not self._has_display():
            variables[BACKEND_VAR] = HEADLESS_BACKEND

        return RuntimeEnvironment(
            os_family=os_family,
            variables=variables,
            reset_config_home=reset_config_home,
        )

    def apply(self, env: RuntimeEnvironment):
        """
        将运行环境配置写入进程环境变量

        Args:
            env: build_environment 返回的配置
        """
        for key, value in env.variables.items():
            if os.environ.get(key) != value:
                os.environ[key] = value
                logger.debug(f"设置环境变量 {key}={value}")

        if env.reset_config_home:
            initialize_matplotlib()
        elif env.backend and "matplotlib" in sys.modules:
            # 已导入的 matplotlib 不会再读取 MPLBACKEND
            sys.modules["matplotlib"].use(env.backend)

    def get_settings_overrides(
        self, fields: Optional[Iterable[str]] = None
    ) -> Dict[str, Any]:
        """
        从 XLSXBOOST_* 环境变量读取设置覆盖值

        Args:
            fields: 只读取这些设置字段，None 表示全部

        Returns:
            Dict[str, Any]: 设置字段 -> 覆盖值

        Raises:
            ConfigError: 数值型环境变量无法解析
        """
        wanted = None if fields is None else set(fields)
        overrides: Dict[str, Any] = {}
        for env_var, (setting, cast) in SETTINGS_ENV_VARS.items():
            if wanted is not None and setting not in wanted:
                continue
            raw = os.getenv(env_var)
            if raw is None or raw.strip() == "":
                continue
            try:
                overrides[setting] = cast(raw.strip())
            except ValueError as e:
                raise ConfigError(
                    f"环境变量 {env_var} 的值无效: {raw}", str(e)
                ) from e
        return overrides

    def print_env_status(self, env: Optional[RuntimeEnvironment] = None):
        """打印环境变量状态"""
        from rich.console import Console
        from rich.table import Table
        from rich import box

        env = env or self.build_environment()

        table = Table(title="环境配置状态", box=box.ROUNDED)
        table.add_column("变量", style="bold yellow")
        table.add_column("值", style="bright_cyan")
        table.add_row("操作系统", env.os_family)
        table.add_row(BACKEND_VAR, os.getenv(BACKEND_VAR) or "（默认）")
        table.add_row(CONFIG_HOME_VAR, os.getenv(CONFIG_HOME_VAR) or "（默认）")
        for env_var in SETTINGS_ENV_VARS:
            value = os.getenv(env_var)
            if value:
                table.add_row(env_var, value)

        Console().print(table)


def initialize_matplotlib():
    """
    重新初始化 matplotlib

    如果设置了 MPLCONFIGDIR 则将其清空，让 matplotlib 回退到默认配置目录，
    然后导入 matplotlib。
    """
    if os.getenv(CONFIG_HOME_VAR):
        logger.info(f"重置 {CONFIG_HOME_VAR}（原值: {os.environ[CONFIG_HOME_VAR]}）")
        os.environ[CONFIG_HOME_VAR] = ""

    matplotlib = importlib.import_module("matplotlib")
    backend = os.getenv(BACKEND_VAR)
    if backend:
        matplotlib.use(backend)
    logger.debug(f"matplotlib {matplotlib.__version__} 已初始化")


def initialize(initialize_matplotlib: bool = False) -> RuntimeEnvironment:
    """
    初始化运行环境，在使用本包其他功能之前调用

    可以重复调用。

    Args:
        initialize_matplotlib: 遇到 matplotlib 初始化问题时设为 True，
            会重置其配置目录并重新导入

    Returns:
        RuntimeEnvironment: 已应用的运行环境配置
    """
    manager = EnvManager()
    env = manager.build_environment(reset_config_home=initialize_matplotlib)
    manager.apply(env)
    logger.info(f"运行环境已初始化: {env.os_family}")
    return env


def get_settings(
    config_file: str = DEFAULT_CONFIG_FILE, fields: Optional[Iterable[str]] = None
) -> Settings:
    """
    获取当前生效的设置（配置文件 + 环境变量覆盖）

    Args:
        config_file: 配置文件路径
        fields: 只应用这些字段的环境变量覆盖，其余字段的环境变量不会被解析

    Returns:
        Settings: 设置对象
    """
    overrides = EnvManager().get_settings_overrides(fields)
    return Config(config_file).settings.merged(overrides)
