"""
图表嵌入

调用绘图函数生成临时 PNG 图片，插入到工作表后删除临时文件。
"""

import logging
import numbers
from contextlib import contextmanager
from io import BytesIO
from typing import Callable, Iterator, Optional

import matplotlib.pyplot as plt
from matplotlib.figure import Figure
from openpyxl import Workbook
from openpyxl.drawing.image import Image as XLImage
from openpyxl.worksheet.worksheet import Worksheet

from ..config.environment import get_settings
from ..exceptions import PlotRenderError
from ..utils.file_utils import FileUtils
from .utils import InsertPosition, check_sheet_owner, resolve_insert_position

logger = logging.getLogger(__name__)

PLOT_SETTING_FIELDS = (
    "plot_width",
    "plot_height",
    "plot_dpi",
    "default_start_col",
    "temp_dir",
)


@contextmanager
def plot_image(
    file_path: str, width: int, height: int, dpi: int = 100, **savefig_kwargs
) -> Iterator[Figure]:
    """
    打开一个 width x height 像素的绘图目标，退出时保存为 PNG

    with 块内抛出异常时不会保存图片，但块内新建的所有图形一定会被关闭。
    块内自行创建的图形会被调整为 width x height 像素后再保存。

    Args:
        file_path: PNG 输出路径
        width: 宽度（像素）
        height: 高度（像素）
        dpi: 分辨率
        **savefig_kwargs: 传递给 Figure.savefig 的其他参数
    """
    existing = set(plt.get_fignums())
    figure = plt.figure(figsize=(width / dpi, height / dpi), dpi=dpi)
    try:
        yield figure
        # 绘图函数可能自行创建了新图形，保存当前活动的图形
        target = plt.gcf()
        if target is not figure:
            target.set_size_inches(width / dpi, height / dpi)
        target.savefig(file_path, format="png", dpi=dpi, **savefig_kwargs)
    finally:
        for num in plt.get_fignums():
            if num not in existing:
                plt.close(num)
        plt.close(figure)


def _pixels(name: str, value) -> int:
    # 接受任意整数值的数字（480、480.0、numpy 整数），统一转换为 int
    if (
        isinstance(value, bool)
        or not isinstance(value, numbers.Real)
        or not float(value).is_integer()
        or value <= 0
    ):
        raise PlotRenderError(f"图片参数 {name} 必须是正整数", repr(value))
    return int(value)


def _load_image(file_path: str, width: int, height: int) -> XLImage:
    # openpyxl 在保存工作簿时才读取图片数据，先读入内存以便立即删除临时文件
    with open(file_path, "rb") as f:
        data = f.read()
    if not data:
        raise PlotRenderError("生成的图片为空", file_path)

    image = XLImage(BytesIO(data))
    image.width = width
    image.height = height
    return image


def add_plot(
    wb: Workbook,
    sheet: Worksheet,
    plot_function: Callable[[], object],
    start_row: Optional[int] = None,
    start_col: Optional[int] = None,
    width: Optional[int] = None,
    height: Optional[int] = None,
    dpi: Optional[int] = None,
    **savefig_kwargs,
) -> bool:
    """
    在工作表中添加图表

    Args:
        wb: Excel 工作簿
        sheet: 工作簿中的工作表
        plot_function: 无参数的绘图函数（使用 matplotlib.pyplot 绘图）
        start_row: 起始行，None 表示追加到已有行之后
        start_col: 起始列，None 表示使用默认列（B 列）
        width: 图片宽度（像素），默认 480
        height: 图片高度（像素），默认 480
        dpi: 分辨率，默认 100
        **savefig_kwargs: 传递给 savefig 的其他参数（如 facecolor）

    Returns:
        bool: 临时图片是否删除成功

    Raises:
        PlotRenderError: 绘图函数执行失败或图片尺寸无效
        InvalidPositionError: 起始行/列无效
        TempFileError: 无法创建临时文件

    Example::

        x = np.arange(-10 * np.pi, 10 * np.pi, 0.1)
        add_plot(wb, sheet, lambda: plt.plot(np.sin(x)))
        wb.save("example2.xlsx")
    """
    check_sheet_owner(wb, sheet)
    if not callable(plot_function):
        raise PlotRenderError("绘图函数不可调用", repr(plot_function))

    settings = get_settings(fields=PLOT_SETTING_FIELDS)
    width = _pixels("width", settings.plot_width if width is None else width)
    height = _pixels("height", settings.plot_height if height is None else height)
    dpi = _pixels("dpi", settings.plot_dpi if dpi is None else dpi)

    default_col = settings.default_start_col if start_col is None else start_col
    position: InsertPosition = resolve_insert_position(
        sheet, start_row, start_col, default_col
    )

    file_path = FileUtils.create_temp_file(
        suffix=".png", prefix="plot_", directory=settings.temp_dir
    )
    try:
        try:
            with plot_image(file_path, width, height, dpi, **savefig_kwargs):
                plot_function()
        except Exception as e:
            logger.error(f"绘图失败: {e}")
            raise PlotRenderError("绘图函数执行失败", str(e)) from e

        image = _load_image(file_path, width, height)
        sheet.add_image(image, position.coordinate)
        logger.debug(
            f"添加 {width}x{height} 图表到 {sheet.title}!{position.coordinate}"
        )
    finally:
        removed = FileUtils.remove_file(file_path)

    return removed
