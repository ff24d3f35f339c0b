"""
提单排版与分页引擎 - 后端核心模块

模块结构：
- config/     配置加载（版面常量/表单文字）
- models/     数据模型定义
- render/     绘图面实现（内存录制/ReportLab PDF）
- doc_gen/    单证生成（模型构建/顶部框/明细分页/页脚）
"""

__version__ = "0.1.0"
