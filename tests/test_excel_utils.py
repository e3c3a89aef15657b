import logging

import pytest
from openpyxl import Workbook

from xlsxboost.excel.styles import HEADING_STYLES, get_heading_style, resolve_color
from xlsxboost.excel.utils import (
    InsertPosition,
    check_sheet_owner,
    count_existing_rows,
    resolve_insert_position,
    write_cell_safely,
)
from xlsxboost.exceptions import (
    InvalidColorError,
    InvalidPositionError,
    InvalidStyleLevelError,
)


def test_write_cell_safely_handles_merged_cells():
    wb = Workbook()
    ws = wb.active

    # 合并 A1:C1，并向中间单元格写值，应写到左上角 A1
    ws.merge_cells("A1:C1")

    cell = write_cell_safely(ws, 1, 2, "merged")  # B1

    assert ws["A1"].value == "merged"
    assert cell.coordinate == "A1"
    # 未合并单元格直接写入
    write_cell_safely(ws, 2, 1, "normal")
    assert ws["A2"].value == "normal"


def test_count_existing_rows():
    ws = Workbook().active
    assert count_existing_rows(ws) == 0

    for i in range(5):
        ws.append([i, i * 2])
    assert count_existing_rows(ws) == 5

    # 稀疏行只统计真正存在的行
    ws["A10"] = "far"
    assert count_existing_rows(ws) == 6


def test_resolve_insert_position_defaults_and_explicit():
    ws = Workbook().active
    for i in range(5):
        ws.append([i])

    assert resolve_insert_position(ws) == InsertPosition(6, 2)
    assert resolve_insert_position(ws, default_col=7) == InsertPosition(6, 7)
    assert resolve_insert_position(ws, start_row=2, start_col=3) == (2, 3)
    assert resolve_insert_position(ws, start_row=2).coordinate == "B2"


@pytest.mark.parametrize("row, col", [(0, 2), (1, 0), (-3, 2), ("1", 2), (1, 2.5)])
def test_resolve_insert_position_rejects_invalid(row, col):
    ws = Workbook().active
    with pytest.raises(InvalidPositionError):
        resolve_insert_position(ws, start_row=row, start_col=col)


def test_check_sheet_owner_warns_for_foreign_sheet(caplog):
    wb = Workbook()
    other = Workbook()

    assert check_sheet_owner(wb, wb.active) is True
    with caplog.at_level(logging.WARNING):
        assert check_sheet_owner(wb, other.active) is False
    assert "不属于" in caplog.text


def test_heading_styles_table():
    assert sorted(HEADING_STYLES) == [1, 2, 3, 4, 5, 6]
    sizes = [HEADING_STYLES[level].size for level in range(1, 7)]
    assert sizes == [22, 18, 16, 16, 14, 12]
    assert get_heading_style(4).bold is False

    with pytest.raises(InvalidStyleLevelError):
        get_heading_style(7)


def test_resolve_color():
    assert resolve_color("black") == "FFFFFF"
    assert resolve_color(" BLACK ") == "FFFFFF"
    assert resolve_color("blue") == "0000FF"
    assert resolve_color("#00ff00") == "00FF00"

    for bad in ("", None, "nope"):
        with pytest.raises(InvalidColorError):
            resolve_color(bad)


def test_resolve_color_treats_eight_digits_as_argb():
    assert resolve_color("#FF1F4E79") == "1F4E79"
    assert resolve_color("801f4e79") == "1F4E79"
