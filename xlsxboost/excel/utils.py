"""
Excel 工具函数

提供单元格写入和插入位置计算等工具函数。
"""

import logging
from typing import NamedTuple, Optional

from openpyxl import Workbook
from openpyxl.cell import Cell, MergedCell
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from ..exceptions import InvalidPositionError

logger = logging.getLogger(__name__)

DEFAULT_START_COL = 2


class InsertPosition(NamedTuple):
    """插入位置（行号、列号均从1开始）"""

    row: int
    column: int

    @property
    def coordinate(self) -> str:
        """Excel 坐标，例如 B6"""
        return f"{get_column_letter(self.column)}{self.row}"


def count_existing_rows(worksheet: Worksheet) -> int:
    """
    统计工作表中已存在的行数（至少包含一个单元格的行）

    Args:
        worksheet: Excel 工作表对象

    Returns:
        int: 已存在的行数，空工作表返回 0
    """
    # max_row 在空表上也返回 1，这里直接统计已创建的单元格所在行。
    # _cells 是 openpyxl 的私有字典 {(row, col): Cell}，Worksheet.max_row
    # 自身也基于它计算（openpyxl 3.1）
    return len({row for row, _col in worksheet._cells})


def resolve_insert_position(
    worksheet: Worksheet,
    start_row: Optional[int] = None,
    start_col: Optional[int] = None,
    default_col: int = DEFAULT_START_COL,
) -> InsertPosition:
    """
    计算新内容的插入位置。

    未指定起始行时追加到已有行之后（已有行数 + 1），未指定起始列时使用 default_col。

    Args:
        worksheet: Excel 工作表对象
        start_row: 起始行（从1开始），None 表示追加
        start_col: 起始列（从1开始），None 表示使用默认列
        default_col: 默认列

    Returns:
        InsertPosition: 插入位置

    Raises:
        InvalidPositionError: 行号或列号小于 1
    """
    row = count_existing_rows(worksheet) + 1 if start_row is None else start_row
    column = default_col if start_col is None else start_col

    for name, value in (("行号", row), ("列号", column)):
        if isinstance(value, bool) or not isinstance(value, int) or value < 1:
            raise InvalidPositionError(f"{name}必须是大于等于 1 的整数", repr(value))

    return InsertPosition(row, column)


def write_cell_safely(worksheet: Worksheet, row: int, col: int, value) -> Cell:
    """
    安全地写入 Excel 单元格，处理合并单元格的情况。
    如果目标单元格是合并单元格的一部分，则写入合并区域的左上角单元格。

    Args:
        worksheet: Excel 工作表对象
        row: 行号（从1开始）
        col: 列号（从1开始）
        value: 要写入的值

    Returns:
        Cell: 实际写入的单元格
    """
    cell_obj = worksheet.cell(row=row, column=col)
    if isinstance(cell_obj, MergedCell):
        for merged_range in worksheet.merged_cells.ranges:
            if cell_obj.coordinate in merged_range:
                min_col, min_row, _max_col, _max_row = merged_range.bounds
                target = worksheet.cell(row=min_row, column=min_col)
                logger.debug(f"{cell_obj.coordinate} 属于合并区域，写入 {target.coordinate}")
                target.value = value
                return target  # type: ignore[return-value]
    cell_obj.value = value
    return cell_obj  # type: ignore[return-value]


def check_sheet_owner(workbook: Workbook, worksheet: Worksheet) -> bool:
    """检查工作表是否属于给定的工作簿，不属于时记录警告"""
    if worksheet.parent is workbook:
        return True
    logger.warning(f"工作表 '{worksheet.title}' 不属于传入的工作簿")
    return False
