"""斜杠命令执行结果与日志记录。

命令的实际执行由调用方负责；这里只定义结果结构，并以结构化日志
记录每次执行（``extra["slash_command"]``），供日志处理器采集。
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any

from cmdref.commands.matcher import MatchResult

logger = logging.getLogger(__name__)


class SlashCommandStatus(str, Enum):
    """命令执行状态。"""

    SUCCESS = "success"
    ERROR = "error"
    NOT_FOUND = "not_found"


@dataclass(frozen=True)
class SlashCommandExecutionResult:
    """单次命令执行结果。"""

    status: SlashCommandStatus
    command_name: str
    subcommand: str | None = None
    error: str | None = None

    @classmethod
    def from_match(
        cls,
        match: MatchResult,
        error: str | None = None,
    ) -> SlashCommandExecutionResult:
        """根据匹配结果构造：未命中为 NOT_FOUND，带 error 为 ERROR。"""
        if not match.canonical_path:
            first_arg = match.args.split(" ", 1)[0]
            return cls(SlashCommandStatus.NOT_FOUND, command_name=first_arg, error=error)
        status = SlashCommandStatus.ERROR if error else SlashCommandStatus.SUCCESS
        return cls(
            status,
            command_name=match.canonical_path[0],
            subcommand=match.subcommand,
            error=error,
        )

    def to_event(self, extension_id: str | None = None) -> dict[str, Any]:
        """日志事件载荷：只区分成功与失败两种状态。"""
        event: dict[str, Any] = {
            "command": self.command_name,
            "status": (
                SlashCommandStatus.SUCCESS.value
                if self.status is SlashCommandStatus.SUCCESS
                else SlashCommandStatus.ERROR.value
            ),
        }
        if self.subcommand:
            event["subcommand"] = self.subcommand
        if extension_id:
            event["extension_id"] = extension_id
        return event


def log_slash_command_execution(
    result: SlashCommandExecutionResult,
    extension_id: str | None = None,
) -> None:
    """记录一次命令执行。"""
    event = result.to_event(extension_id)
    if result.status is SlashCommandStatus.SUCCESS:
        logger.info(
            "命令执行 [%s] 状态: %s",
            result.command_name,
            event["status"],
            extra={"slash_command": event},
        )
    else:
        logger.info(
            "命令执行 [%s] 状态: %s | 原因: %s",
            result.command_name,
            event["status"],
            result.error or result.status.value,
            extra={"slash_command": event},
        )
