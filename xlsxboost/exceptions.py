"""
统一异常处理模块

定义项目中使用的异常层次结构，提供清晰的错误分类和友好的错误信息。
"""


class XlsxBoostError(Exception):
    """基础异常类 - 所有项目异常的父类"""

    def __init__(self, message: str = "", details: str = ""):
        self.message = message
        self.details = details
        super().__init__(self.message)

    def __str__(self):
        if self.details:
            return f"{self.message} - {self.details}"
        return self.message


class ConfigError(XlsxBoostError):
    """配置相关错误"""

    pass


class UnsupportedPlatformError(XlsxBoostError):
    """当前操作系统不受支持"""

    pass


class FileOpenError(XlsxBoostError):
    """使用默认程序打开文件失败"""

    pass


class TempFileError(XlsxBoostError):
    """临时文件创建或删除失败"""

    pass


class PlotRenderError(XlsxBoostError):
    """绘图回调执行失败"""

    pass


class StyleError(XlsxBoostError):
    """单元格样式相关错误"""

    pass


class InvalidStyleLevelError(StyleError):
    """标题级别不在 1-6 范围内"""

    pass


class InvalidColorError(StyleError):
    """无法识别的颜色值"""

    pass


class InvalidPositionError(XlsxBoostError):
    """插入位置（行/列）无效"""

    pass


def friendly_error_message(error: Exception) -> str:
    """将异常转换为用户友好的中文提示

    Args:
        error: 捕获到的异常

    Returns:
        str: 用户友好的错误提示
    """
    if isinstance(error, UnsupportedPlatformError):
        return "当前操作系统不支持自动打开文件，请手动打开。"
    if isinstance(error, FileOpenError):
        return "无法打开文件，请确认文件存在且已安装 Excel / LibreOffice 等程序。"
    if isinstance(error, InvalidStyleLevelError):
        return "标题级别无效，只支持 1 到 6。"
    if isinstance(error, InvalidColorError):
        return "颜色值无效，请使用颜色名称或 #RRGGBB 格式。"
    if isinstance(error, PlotRenderError):
        return "绘图失败，请检查绘图函数。"
    if isinstance(error, TempFileError):
        return "临时文件操作失败，请检查磁盘空间和目录权限。"
    if isinstance(error, PermissionError):
        return "没有写入权限，请确认文件未被其他程序占用。"

    # 默认返回原始信息
    return str(error)
