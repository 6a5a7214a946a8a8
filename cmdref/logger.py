"""日志配置模块：分级日志与路径脱敏。"""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from cmdref.references.resolver import PathResolutionOutcome

# 日志器名称常量
LOGGER_NAME = "cmdref"

# 绝对路径（Unix / Windows）
_ABS_PATH_PATTERN = re.compile(
    r"(?<![:/\w])/(?!/)(?:[\w.\-]+/)+[\w.\-]+|(?<!\w)[A-Za-z]:\\(?:[\w.\-]+\\)+[\w.\-]+",
)


def _sanitize(text: str) -> str:
    """绝对路径脱敏：保留文件名，隐藏目录结构。"""

    def _mask_path(match: re.Match[str]) -> str:
        path = match.group(0)
        sep = "\\" if "\\" in path else "/"
        parts = path.split(sep)
        filename = parts[-1] if parts else path
        return f"<path>/{filename}"

    return _ABS_PATH_PATTERN.sub(_mask_path, text)


class SanitizingFormatter(logging.Formatter):
    """自动脱敏的日志格式化器。"""

    def format(self, record: logging.LogRecord) -> str:
        original = super().format(record)
        return _sanitize(original)


_LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s - %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: str = "INFO") -> logging.Logger:
    """配置并返回 cmdref 根日志器。

    Args:
        level: 日志级别字符串，支持 DEBUG/INFO/WARNING/ERROR。

    Returns:
        配置好的 Logger 实例。
    """
    level_upper = level.upper()
    numeric_level = getattr(logging, level_upper, logging.INFO)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(numeric_level)

    # 避免重复添加 handler
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setLevel(numeric_level)
        formatter = SanitizingFormatter(_LOG_FORMAT, datefmt=_DATE_FORMAT)
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    else:
        for h in logger.handlers:
            h.setLevel(numeric_level)

    logger.propagate = False

    return logger


def get_logger(name: str | None = None) -> logging.Logger:
    """获取 cmdref 命名空间下的子日志器。

    Args:
        name: 子模块名称，如 "cli"、"references"。
              为 None 时返回根日志器。
    """
    if name:
        return logging.getLogger(f"{LOGGER_NAME}.{name}")
    return logging.getLogger(LOGGER_NAME)


def log_resolution_outcome(
    logger: logging.Logger,
    outcome: PathResolutionOutcome,
) -> None:
    """记录一批 @path 的归类结果。

    DEBUG 级别输出各类路径明细；有 ignored / failed 时追加一条 INFO 摘要。
    """
    logger.debug(
        "路径归类 resolved: %s | ignored: %s | failed: %s",
        [r.display_path for r in outcome.resolved],
        [f"{i.path}({i.reason.value})" for i in outcome.ignored],
        outcome.failed,
    )
    if outcome.ignored or outcome.failed:
        logger.info(
            "路径归类：%d 个已解析，%d 个被忽略，%d 个失败",
            len(outcome.resolved),
            len(outcome.ignored),
            len(outcome.failed),
        )
