"""
运行期配置 - 读取 documents/runtime.yaml

职责：
- 加载版面尺寸/字号/行距等排版常量
- 加载日志配置
- 提供环境变量覆盖机制
- 类型安全的配置访问
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings

from ..models import ColumnBounds, FontSpec, FontStyle


class LayoutConfig(BaseModel):
    """版面配置（单位mm，字号pt）"""

    # 页面（A4纵向）
    page_width: float = 210.0
    page_height: float = 297.0
    margin: float = 5.0
    page_padding: float = 5.0
    box_padding: float = 5.0
    line_width: float = 0.3

    # 标题与顶部框
    title_y: float = 10.0
    title_gap: float = 5.0
    line_height: float = 3.5
    label_height: float = 5.0
    section_padding: float = 5.0
    field_label_gap: float = 4.0
    field_gap: float = 4.0
    paragraph_gap: float = 1.5
    reconcile_trim: float = 2.0

    # 分公司logo
    logo_width: float = 40.0
    logo_height: float = 15.0
    logo_padding: float = 3.0

    # 集装箱明细区
    column_ratios: list[float] = Field(default_factory=lambda: [0.25, 0.15, 0.30, 0.15, 0.15])
    header_offset: float = 3.0
    header_min_height: float = 5.0
    row_gap: float = 3.0
    entry_gap: float = 2.0
    safety_margin: float = 5.0

    # 页脚（仅首页）
    footer_height: float = 35.0
    footer_top_row_height: float = 10.0
    footer_left_share: float = 0.6

    # 续页
    continuation_top_offset: float = 5.0
    continuation_bottom_margin: float = 5.0

    # 字体
    font_family: str = "Helvetica"
    title_font_size: float = 12.0
    doc_title_font_size: float = 10.0
    label_font_size: float = 8.0
    value_font_size: float = 7.0
    body_font_size: float = 6.0
    small_font_size: float = 6.0

    # === 派生几何 ===

    @property
    def inner_margin(self) -> float:
        return self.margin + self.page_padding

    @property
    def inner_width(self) -> float:
        return self.page_width - 2 * self.inner_margin

    @property
    def inner_right(self) -> float:
        return self.inner_margin + self.inner_width

    @property
    def mid_x(self) -> float:
        return self.page_width / 2

    @property
    def footer_top(self) -> float:
        return self.page_height - self.inner_margin - self.footer_height

    @property
    def continuation_top(self) -> float:
        return self.inner_margin + self.continuation_top_offset

    @property
    def continuation_bottom(self) -> float:
        return self.page_height - self.inner_margin - self.continuation_bottom_margin

    def left_column(self) -> ColumnBounds:
        return ColumnBounds(left=self.inner_margin, right=self.mid_x, padding=self.box_padding)

    def right_column(self) -> ColumnBounds:
        return ColumnBounds(left=self.mid_x, right=self.inner_right, padding=self.box_padding)

    def table_columns(self) -> list[ColumnBounds]:
        """明细区五栏（按比例切分内宽）"""
        columns = []
        x = self.inner_margin
        for ratio in self.column_ratios:
            width = self.inner_width * ratio
            columns.append(ColumnBounds(left=x, right=x + width, padding=self.box_padding))
            x += width
        return columns

    def font(self, size: float, style: FontStyle = FontStyle.NORMAL) -> FontSpec:
        return FontSpec(family=self.font_family, style=style, size=size)


class LoggingConfig(BaseModel):
    """日志配置"""

    log_level: str = "INFO"
    log_format: str = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


class RuntimeConfig(BaseSettings):
    """运行期配置（支持环境变量覆盖）"""

    # 表单文字规范路径（为空时使用内置默认值）
    form_spec_path: Path | None = None

    # 各子配置
    layout: LayoutConfig = Field(default_factory=LayoutConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = {
        "env_prefix": "BOL_",
        "env_nested_delimiter": "__",
        "arbitrary_types_allowed": True,
    }

    @classmethod
    def from_yaml(cls, yaml_path: str | Path) -> RuntimeConfig:
        """从YAML文件加载配置"""
        path = Path(yaml_path)
        if not path.exists():
            return cls()

        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

        runtime_opts = data.get("runtime_options", {})

        config = cls(
            layout=LayoutConfig(**cls._extract(runtime_opts, "layout")),
            logging=LoggingConfig(**cls._extract(runtime_opts, "logging")),
        )

        spec_path = runtime_opts.get("form_spec_path")
        if spec_path:
            config._resolve_spec_path(Path(spec_path), base_dir=path.parent)
        return config

    @staticmethod
    def _extract(data: dict[str, Any], key: str) -> dict[str, Any]:
        """提取并展平配置"""
        section = data.get(key, {}) or {}
        result = {}
        for k, v in section.items():
            if isinstance(v, dict) and "default" in v:
                result[k] = v["default"]
            elif not isinstance(v, dict):
                result[k] = v
        return result

    def _resolve_spec_path(self, spec_path: Path, base_dir: Path) -> None:
        """相对路径基于配置文件所在目录解析"""
        if not spec_path.is_absolute():
            spec_path = (base_dir / spec_path).resolve()
        self.form_spec_path = spec_path


# 全局配置实例
_config: RuntimeConfig | None = None


def get_config() -> RuntimeConfig:
    """获取全局配置（惰性加载）"""
    global _config
    if _config is None:
        default_path = Path("documents/runtime.yaml")
        if not default_path.exists():
            fallback_path = Path("config/runtime.yaml")
            if fallback_path.exists():
                default_path = fallback_path
        _config = RuntimeConfig.from_yaml(default_path)
    return _config


def reload_config(yaml_path: str | Path | None = None) -> RuntimeConfig:
    """重新加载配置"""
    global _config
    path = yaml_path or "documents/runtime.yaml"
    _config = RuntimeConfig.from_yaml(path)
    return _config
