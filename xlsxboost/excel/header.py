"""
标题插入

在工作表中插入带有 h1-h6 样式的标题单元格。
"""

import logging
from typing import Optional

from openpyxl import Workbook
from openpyxl.cell import Cell
from openpyxl.worksheet.worksheet import Worksheet

from ..config.environment import get_settings
from .styles import get_heading_style, resolve_color
from .utils import check_sheet_owner, resolve_insert_position, write_cell_safely

logger = logging.getLogger(__name__)


def add_header(
    wb: Workbook,
    sheet: Worksheet,
    value: str = "Header",
    level: int = 1,
    color: Optional[str] = None,
    start_row: Optional[int] = None,
    start_col: Optional[int] = None,
) -> Cell:
    """
    在工作表中添加标题

    Args:
        wb: Excel 工作簿
        sheet: 工作簿中的工作表
        value: 标题文本
        level: HTML 标题级别（1-6）
        color: 颜色名称或十六进制颜色，默认取设置中的 header_color
        start_row: 起始行，None 表示追加到已有行之后
        start_col: 起始列，None 表示使用默认列（B 列）

    Returns:
        Cell: 写入标题的单元格

    Raises:
        InvalidStyleLevelError: 级别不在 1-6 范围内
        InvalidColorError: 颜色无法识别
        InvalidPositionError: 起始行/列无效

    Example::

        wb = Workbook()
        sheet = wb.create_sheet("example")
        add_header(wb, sheet, value="Header 1", level=1, color="black")
        wb.save("example.xlsx")
    """
    check_sheet_owner(wb, sheet)

    if color is None or start_col is None:
        settings = get_settings(fields=("header_color", "default_start_col"))
        color = settings.header_color if color is None else color
        default_col = settings.default_start_col
    else:
        default_col = start_col

    hex_color = resolve_color(color)
    style = get_heading_style(level)
    position = resolve_insert_position(sheet, start_row, start_col, default_col)

    cell = write_cell_safely(sheet, position.row, position.column, value)
    cell.font = style.to_font(hex_color)

    logger.debug(
        f"添加 h{level} 标题 '{value}' 到 {sheet.title}!{cell.coordinate} (颜色 {hex_color})"
    )
    return cell
