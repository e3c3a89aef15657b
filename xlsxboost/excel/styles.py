"""
标题样式

定义类似 HTML h1-h6 的六种标题预设，并负责颜色值的解析。
"""

import re
from dataclasses import dataclass
from typing import Dict

from matplotlib import colors as mcolors
from openpyxl.styles import Font

from ..exceptions import InvalidColorError, InvalidStyleLevelError


@dataclass(frozen=True)
class HeadingStyle:
    """标题样式预设"""

    size: int
    bold: bool
    italic: bool

    def to_font(self, color: str) -> Font:
        """生成 openpyxl 字体（不带下划线）"""
        return Font(
            size=self.size,
            bold=self.bold,
            italic=self.italic,
            underline=None,
            color=color,
        )


_BARE_HEX = re.compile(r"[0-9A-Fa-f]{6}")
_ARGB_HEX = re.compile(r"#?[0-9A-Fa-f]{2}([0-9A-Fa-f]{6})")

HEADING_STYLES: Dict[int, HeadingStyle] = {
    1: HeadingStyle(size=22, bold=True, italic=False),
    2: HeadingStyle(size=18, bold=True, italic=False),
    3: HeadingStyle(size=16, bold=True, italic=True),
    4: HeadingStyle(size=16, bold=False, italic=True),
    5: HeadingStyle(size=14, bold=False, italic=True),
    6: HeadingStyle(size=12, bold=False, italic=True),
}


def get_heading_style(level: int) -> HeadingStyle:
    """
    获取指定级别的标题样式

    Args:
        level: 标题级别（1-6）

    Returns:
        HeadingStyle: 样式预设

    Raises:
        InvalidStyleLevelError: 级别不在 1-6 范围内
    """
    if (
        not isinstance(level, int)
        or isinstance(level, bool)
        or level not in HEADING_STYLES
    ):
        raise InvalidStyleLevelError("标题级别必须在 1 到 6 之间", repr(level))
    return HEADING_STYLES[level]


def resolve_color(color: str) -> str:
    """
    将颜色名称或 #RRGGBB 转换为 openpyxl 使用的十六进制颜色（如 FFFFFF）。

    "black" 会被替换为 "white"：在生成的表格中黑白两色是反的，
    调用方按显示效果传入颜色。

    Args:
        color: 颜色名称（black、red ...）、#RRGGBB 或 openpyxl 风格的 #AARRGGBB

    Returns:
        str: 6 位大写十六进制颜色

    Raises:
        InvalidColorError: 无法识别的颜色
    """
    if not isinstance(color, str) or not color.strip():
        raise InvalidColorError("颜色不能为空", repr(color))

    color = color.strip()
    argb = _ARGB_HEX.fullmatch(color)
    if argb:
        # openpyxl 的 8 位颜色是 AARRGGBB，字体颜色只保留 RGB 部分
        return argb.group(1).upper()
    if color.lower() == "black":
        color = "white"
    elif _BARE_HEX.fullmatch(color):
        color = f"#{color}"

    try:
        hex_color = mcolors.to_hex(color, keep_alpha=False)
    except ValueError as e:
        raise InvalidColorError(f"无法识别的颜色: {color}", str(e)) from e

    return hex_color.lstrip("#").upper()
