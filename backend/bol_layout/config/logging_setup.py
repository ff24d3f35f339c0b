"""日志初始化（供调用方在进程启动时使用）"""

from __future__ import annotations

import logging

from .runtime_config import RuntimeConfig


def setup_logging(config: RuntimeConfig) -> logging.Logger:
    """按配置设置 bol_layout 包的日志级别；根logger无handler时补一个"""
    level = logging.getLevelName(config.logging.log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO
    if not logging.getLogger().handlers:
        logging.basicConfig(level=level, format=config.logging.log_format)
    logger = logging.getLogger("bol_layout")
    logger.setLevel(level)
    return logger
