"""配置管理模块：加载环境变量、.env 文件和默认值。"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from cmdref.ignore import DEFAULT_APP_IGNORE_FILE


class ConfigError(Exception):
    """配置缺失或校验失败时抛出的异常。"""


_ALLOWED_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CmdRefConfig:
    """不可变的全局配置对象。"""

    workspace_dirs: tuple[str, ...] = (".",)  # 第一个为主目录
    respect_git_ignore: bool = True
    respect_app_ignore: bool = True
    app_ignore_file: str = DEFAULT_APP_IGNORE_FILE
    command_sigil: str = "/"
    commands_file: str | None = None  # JSON 命令表，None 时使用内置命令表
    log_level: str = "INFO"


def load_runtime_env() -> None:
    """加载当前工作目录 .env（不覆盖已存在环境变量）。"""
    dotenv_path = Path.cwd() / ".env"
    load_dotenv(dotenv_path=dotenv_path, override=False)


def _parse_bool(value: str | None, name: str, default: bool) -> bool:
    """将字符串解析为布尔值。"""
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "on"}:
        return True
    if normalized in {"0", "false", "no", "off"}:
        return False
    raise ConfigError(f"配置项 {name} 必须为布尔值，当前值: {value!r}")


def _parse_log_level(value: str | None) -> str:
    """解析日志级别。"""
    if value is None:
        return "INFO"
    normalized = value.strip().upper()
    if normalized not in _ALLOWED_LOG_LEVELS:
        raise ConfigError(
            "配置项 CMDREF_LOG_LEVEL 必须是 "
            f"{sorted(_ALLOWED_LOG_LEVELS)} 之一，当前值: {value!r}"
        )
    return normalized


def _parse_workspace_dirs(value: str | None) -> tuple[str, ...]:
    """解析以 os.pathsep 分隔的工作区目录列表（去空、去重、保序）。"""
    if value is None:
        return (".",)
    dirs = tuple(dict.fromkeys(d.strip() for d in value.split(os.pathsep) if d.strip()))
    if not dirs:
        raise ConfigError("配置项 CMDREF_WORKSPACE_DIRS 至少需要一个目录")
    return dirs


def _parse_sigil(value: str | None) -> str:
    """解析命令前缀字符。"""
    if value is None:
        return "/"
    sigil = value.strip()
    if len(sigil) != 1 or sigil == "@":
        raise ConfigError(
            f"配置项 CMDREF_COMMAND_SIGIL 必须为单个非 @ 字符，当前值: {value!r}"
        )
    return sigil


def _parse_filename(value: str | None, name: str, default: str) -> str:
    if value is None:
        return default
    normalized = value.strip()
    if not normalized or "/" in normalized or "\\" in normalized:
        raise ConfigError(f"配置项 {name} 必须为文件名，当前值: {value!r}")
    return normalized


def load_config() -> CmdRefConfig:
    """加载配置。优先级：环境变量 > .env 文件 > 默认值。"""
    load_runtime_env()

    commands_file = (os.environ.get("CMDREF_COMMANDS_FILE") or "").strip() or None

    config = CmdRefConfig(
        workspace_dirs=_parse_workspace_dirs(os.environ.get("CMDREF_WORKSPACE_DIRS")),
        respect_git_ignore=_parse_bool(
            os.environ.get("CMDREF_RESPECT_GIT_IGNORE"),
            "CMDREF_RESPECT_GIT_IGNORE",
            True,
        ),
        respect_app_ignore=_parse_bool(
            os.environ.get("CMDREF_RESPECT_APP_IGNORE"),
            "CMDREF_RESPECT_APP_IGNORE",
            True,
        ),
        app_ignore_file=_parse_filename(
            os.environ.get("CMDREF_APP_IGNORE_FILE"),
            "CMDREF_APP_IGNORE_FILE",
            DEFAULT_APP_IGNORE_FILE,
        ),
        command_sigil=_parse_sigil(os.environ.get("CMDREF_COMMAND_SIGIL")),
        commands_file=commands_file,
        log_level=_parse_log_level(os.environ.get("CMDREF_LOG_LEVEL")),
    )
    logger.debug("配置已加载：%s", config)
    return config
