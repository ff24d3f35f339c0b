"""
配置层 - 加载运行期配置与表单规范

职责：
- 加载 documents/runtime.yaml（版面常量/日志）
- 加载 documents/form_spec.yaml（表单固定文字/默认值）
- 提供类型安全的配置访问接口
"""

from .logging_setup import setup_logging
from .runtime_config import LayoutConfig, LoggingConfig, RuntimeConfig, get_config, reload_config
from .spec_loader import FormDefaults, FormSpec, FormSpecLoader, load_form_spec

__all__ = [
    "FormSpecLoader",
    "FormSpec",
    "FormDefaults",
    "load_form_spec",
    "RuntimeConfig",
    "LayoutConfig",
    "LoggingConfig",
    "get_config",
    "reload_config",
    "setup_logging",
]
