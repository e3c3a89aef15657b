"""
配置管理模块

处理运行环境初始化、默认设置和环境变量管理。
"""

from .settings import Config, Settings
from .environment import (
    EnvManager,
    RuntimeEnvironment,
    get_settings,
    initialize,
    initialize_matplotlib,
)

__all__ = [
    "Config",
    "Settings",
    "EnvManager",
    "RuntimeEnvironment",
    "get_settings",
    "initialize",
    "initialize_matplotlib",
]
