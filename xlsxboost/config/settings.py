"""
应用程序设置

管理 xlsxboost 的默认参数（起始列、图片尺寸、临时目录等）。
"""

import json
import logging
import os
from dataclasses import dataclass, asdict, fields
from typing import Dict, Any

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "xlsxboost.json"


@dataclass
class Settings:
    """应用程序设置数据类"""

    default_start_col: int = 2  # 未指定起始列时使用的列号（B 列）
    plot_width: int = 480  # 图片宽度（像素）
    plot_height: int = 480  # 图片高度（像素）
    plot_dpi: int = 100
    header_color: str = "#FFFFFF"
    temp_dir: str = ""  # 临时图片目录，空表示系统临时目录
    log_level: str = "INFO"

    def to_dict(self) -> Dict:
        """转换为字典"""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict) -> "Settings":
        """从字典创建设置，忽略未知字段"""
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            logger.warning(f"忽略未知的设置项: {', '.join(sorted(unknown))}")
        return cls(**{k: v for k, v in data.items() if k in known})

    def merged(self, overrides: Dict[str, Any]) -> "Settings":
        """返回应用覆盖值后的新设置对象"""
        data = self.to_dict()
        data.update(overrides)
        return Settings.from_dict(data)


class Config:
    """配置管理器（只读加载配置文件）"""

    def __init__(self, config_file: str = DEFAULT_CONFIG_FILE):
        """
        初始化配置管理器

        Args:
            config_file: 配置文件路径
        """
        self.config_file = config_file
        self.settings = self._load_settings()

    def _load_settings(self) -> Settings:
        """
        加载设置

        Returns:
            Settings: 设置对象
        """
        if os.path.exists(self.config_file):
            try:
                with open(self.config_file, "r", encoding="utf-8") as f:
                    data = json.load(f)
                settings = Settings.from_dict(data)
                logger.info(f"成功加载配置文件: {self.config_file}")
                return settings
            except (OSError, ValueError, TypeError) as e:
                logger.warning(f"加载配置文件失败: {e}，使用默认设置")
        else:
            logger.debug("配置文件不存在，使用默认设置")

        return Settings()
