"""
Excel 处理模块

提供标题插入、图表嵌入以及单元格操作等功能。
"""

from .header import add_header
from .plot import add_plot, plot_image
from .styles import HEADING_STYLES, HeadingStyle, get_heading_style, resolve_color
from .utils import (
    InsertPosition,
    count_existing_rows,
    resolve_insert_position,
    write_cell_safely,
)

__all__ = [
    "add_header",
    "add_plot",
    "plot_image",
    "HEADING_STYLES",
    "HeadingStyle",
    "get_heading_style",
    "resolve_color",
    "InsertPosition",
    "count_existing_rows",
    "resolve_insert_position",
    "write_cell_safely",
]
