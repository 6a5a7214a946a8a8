"""CLI 渲染：以 Rich 表格展示分词、路径归类与命令匹配结果。"""

from __future__ import annotations

from typing import Sequence

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from cmdref.cli.theme import THEME
from cmdref.commands import MatchResult
from cmdref.references import (
    ParsedReference,
    PathResolutionOutcome,
    SegmentKind,
    escape_path,
)


def render_segments(console: Console, parsed: ParsedReference) -> None:
    """渲染分词结果。"""
    if not parsed.segments:
        console.print(f"  [{THEME.DIM}]（空输入）[/{THEME.DIM}]")
        return
    table = Table(show_header=True, header_style=THEME.BOLD, box=None, padding=(0, 2))
    table.add_column("类型", style=THEME.DIM)
    table.add_column("内容")
    for seg in parsed.segments:
        style = THEME.PRIMARY_LIGHT if seg.kind is SegmentKind.AT_PATH else ""
        table.add_row(seg.kind.value, Text(seg.content, style=style))
    console.print(table)


def render_outcome(console: Console, outcome: PathResolutionOutcome) -> None:
    """渲染路径归类结果：resolved 表格 + ignored / failed 列表。"""
    if outcome.resolved:
        table = Table(show_header=True, header_style=THEME.BOLD, box=None, padding=(0, 2))
        table.add_column("引用")
        table.add_column("显示路径", style=THEME.PRIMARY_LIGHT)
        table.add_column("绝对路径", style=THEME.DIM)
        for item in outcome.resolved:
            table.add_row(
                Text(item.original_token),
                Text("@" + escape_path(item.display_path)),
                Text(item.absolute_path),
            )
        console.print(table)

    for ignored in outcome.ignored:
        console.print(
            f"  [{THEME.GOLD}]{THEME.WARNING}[/{THEME.GOLD}] "
            f"已忽略 {escape(ignored.path)}"
            f" [{THEME.DIM}]({ignored.reason.value})[/{THEME.DIM}]",
            highlight=False,
        )
    for failed in outcome.failed:
        console.print(
            f"  [{THEME.RED}]{THEME.FAILURE}[/{THEME.RED}] 无法解析 {escape(failed)}",
            highlight=False,
        )


def render_match(
    console: Console,
    match: MatchResult,
    suggestions: Sequence[str] = (),
    *,
    sigil: str = "/",
) -> None:
    """渲染命令匹配结果，未命中时附带相似命令建议。"""
    if match.matched is None:
        typed = match.args.split(" ", 1)[0]
        console.print(
            f"  [{THEME.RED}]{THEME.FAILURE}[/{THEME.RED}] 未知命令：{escape(sigil + typed)}",
            highlight=False,
        )
    else:
        canonical = sigil + " ".join(match.canonical_path)
        console.print(
            f"  [{THEME.PRIMARY_LIGHT}]{THEME.SUCCESS}[/{THEME.PRIMARY_LIGHT}]"
            f" [{THEME.BOLD}]{escape(canonical)}[/{THEME.BOLD}]",
            highlight=False,
        )
        if match.matched.description:
            console.print(
                f"  [{THEME.DIM}]{THEME.TREE_MID} {escape(match.matched.description)}[/{THEME.DIM}]",
                highlight=False,
            )
        if match.subcommand:
            console.print(
                f"  [{THEME.DIM}]{THEME.TREE_MID} 子命令：{escape(match.subcommand)}[/{THEME.DIM}]",
                highlight=False,
            )
        console.print(
            f"  [{THEME.DIM}]{THEME.TREE_END} 参数：{escape(match.args) or '（无）'}[/{THEME.DIM}]",
            highlight=False,
        )

    if suggestions:
        console.print(
            f"  [{THEME.DIM}]你是不是想输入：[/{THEME.DIM}]"
            + "、".join(f"[{THEME.CYAN}]{escape(s)}[/{THEME.CYAN}]" for s in suggestions),
            highlight=False,
        )
