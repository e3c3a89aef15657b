"""
xlsxboost - openpyxl 便捷工具包

提供初始化运行环境、打开生成的 .xlsx 文件、插入标题样式以及嵌入 matplotlib 图表等功能。
"""

__version__ = "1.0.0"
__author__ = "xlsxboost contributors"
__email__ = "xlsxboost@users.noreply.github.com"
__license__ = "MIT"

from .config.environment import initialize, initialize_matplotlib
from .excel.header import add_header
from .excel.plot import add_plot
from .utils.file_utils import FileUtils

open_file = FileUtils.open_file

__all__ = [
    "__version__",
    "initialize",
    "initialize_matplotlib",
    "open_file",
    "add_header",
    "add_plot",
]
