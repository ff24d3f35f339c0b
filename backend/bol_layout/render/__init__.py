"""
绘图面实现 - IDrawingSurface 的具体后端

子模块：
- metrics: 标准字体度量
- recording: 内存录制绘图面（测试/检查用）
- reportlab_surface: ReportLab PDF绘图面
"""

from .metrics import font_name, string_width_mm
from .recording import RecordingSurface
from .reportlab_surface import ReportLabSurface

__all__ = [
    "RecordingSurface",
    "ReportLabSurface",
    "font_name",
    "string_width_mm",
]
