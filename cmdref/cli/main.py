"""CLI 主入口：解析一行或多行输入并渲染结果。"""

from __future__ import annotations

import argparse
import dataclasses
import logging
import sys
from typing import Sequence, TextIO

from rich.console import Console
from rich.markup import escape

from cmdref.cli.render import render_match, render_outcome, render_segments
from cmdref.cli.theme import THEME
from cmdref.commands import (
    DEFAULT_COMMANDS,
    CommandEntry,
    CommandTableError,
    SlashCommandExecutionResult,
    is_slash_command,
    load_command_table,
    log_slash_command_execution,
    match_command,
    suggest_for_match,
)
from cmdref.config import CmdRefConfig, ConfigError, load_config
from cmdref.logger import log_resolution_outcome, setup_logging
from cmdref.references import resolve_reference_paths, tokenize
from cmdref.workspace import LocalWorkspace, WorkspaceError

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cmdref",
        description="解析 @path 引用与斜杠命令",
    )
    parser.add_argument("text", nargs="*", help="待解析的输入；省略时从标准输入读取")
    parser.add_argument(
        "--commands",
        metavar="FILE",
        default=None,
        help="JSON 命令表文件（默认使用内置命令表）",
    )
    parser.add_argument(
        "--workspace",
        metavar="DIR",
        action="append",
        default=None,
        help="工作区根目录，可重复指定；第一个为主目录",
    )
    parser.add_argument(
        "--no-git-ignore",
        action="store_true",
        help="不应用 .gitignore 规则",
    )
    parser.add_argument(
        "--no-app-ignore",
        action="store_true",
        help="不应用应用级忽略文件规则",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"),
        help="日志级别（覆盖 CMDREF_LOG_LEVEL）",
    )
    return parser


def _apply_arguments(config: CmdRefConfig, args: argparse.Namespace) -> CmdRefConfig:
    """命令行参数覆盖环境配置。"""
    overrides: dict[str, object] = {}
    if args.workspace:
        overrides["workspace_dirs"] = tuple(args.workspace)
    if args.no_git_ignore:
        overrides["respect_git_ignore"] = False
    if args.no_app_ignore:
        overrides["respect_app_ignore"] = False
    if args.commands:
        overrides["commands_file"] = args.commands
    if args.log_level:
        overrides["log_level"] = args.log_level
    return dataclasses.replace(config, **overrides)


def _handle_command(
    console: Console,
    line: str,
    commands: Sequence[CommandEntry],
    sigil: str,
) -> None:
    match = match_command(line, commands)
    suggestions = suggest_for_match(match, commands, sigil=sigil)
    render_match(console, match, suggestions, sigil=sigil)
    log_slash_command_execution(SlashCommandExecutionResult.from_match(match))


def _handle_references(console: Console, line: str, workspace: LocalWorkspace) -> None:
    parsed = tokenize(line)
    render_segments(console, parsed)
    if not parsed.has_references:
        return
    outcome = resolve_reference_paths(parsed.path_segments, workspace)
    log_resolution_outcome(logger, outcome)
    render_outcome(console, outcome)


def run(
    argv: Sequence[str] | None = None,
    *,
    console: Console | None = None,
    stdin: TextIO | None = None,
) -> int:
    """执行 CLI，返回退出码。"""
    console = console or Console()
    args = build_parser().parse_args(argv)

    try:
        config = _apply_arguments(load_config(), args)
    except ConfigError as exc:
        console.print(f"  [{THEME.RED}]{THEME.FAILURE} 配置错误：{escape(str(exc))}[/{THEME.RED}]")
        return 1

    setup_logging(config.log_level)

    try:
        commands = (
            load_command_table(config.commands_file)
            if config.commands_file
            else DEFAULT_COMMANDS
        )
        workspace = LocalWorkspace.from_config(config)
    except (CommandTableError, WorkspaceError) as exc:
        console.print(f"  [{THEME.RED}]{THEME.FAILURE} {escape(str(exc))}[/{THEME.RED}]")
        return 1

    text = " ".join(args.text) if args.text else (stdin or sys.stdin).read()
    for line in text.splitlines():
        if not line.strip():
            continue
        if is_slash_command(line, config.command_sigil):
            _handle_command(console, line, commands, config.command_sigil)
        else:
            _handle_references(console, line, workspace)
    return 0


def main() -> None:
    """CLI 入口函数。"""
    try:
        code = run()
    except KeyboardInterrupt:
        code = 130
    sys.exit(code)
