"""斜杠命令匹配：沿命令树逐级匹配主名称与别名。

每一层先按主名称精确匹配（表内顺序第一个命中），未命中再按别名匹配。
两轮匹配的顺序是固定策略：某个输入同时是 A 的别名与 B 的主名称时，
总是选中 B。canonical_path 始终记录主名称。
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

DEFAULT_SIGIL = "/"


@dataclass(frozen=True)
class CommandEntry:
    """命令树节点。子命令按值持有。"""

    name: str
    alt_names: tuple[str, ...] = ()
    sub_commands: tuple[CommandEntry, ...] | None = None
    description: str = ""

    @property
    def all_names(self) -> tuple[str, ...]:
        return (self.name, *self.alt_names)


@dataclass(frozen=True)
class MatchResult:
    """命令匹配结果。"""

    matched: CommandEntry | None   # 最后一个命中的节点，首个 token 未命中时为 None
    args: str                      # 未消费 token 以单个空格拼接
    canonical_path: tuple[str, ...]
    subcommand: str | None = None  # canonical_path[1:] 拼接，长度 ≤ 1 时为 None


def is_slash_command(text: str, sigil: str = DEFAULT_SIGIL) -> bool:
    """判断输入是否为命令；``//`` 与 ``/*`` 开头的注释行不算。"""
    stripped = text.strip()
    if not stripped.startswith(sigil):
        return False
    return not stripped.startswith((sigil + sigil, sigil + "*"))


def _find_entry(token: str, level: Sequence[CommandEntry]) -> CommandEntry | None:
    for entry in level:
        if entry.name == token:
            return entry
    for entry in level:
        if token in entry.alt_names:
            return entry
    return None


def match_command(
    query: str,
    commands: Sequence[CommandEntry],
) -> MatchResult:
    """将 ``/command sub args`` 匹配到命令树。

    首字符作为命令前缀直接丢弃，不做校验；调用方应先用
    is_slash_command 判定。

    Args:
        query: 原始输入，如 ``"/memory add some data"``
        commands: 根层命令列表

    Returns:
        MatchResult；未命中时 matched 为 None 且 args 包含全部 token
    """
    tokens = query.strip()[1:].split()

    level: Sequence[CommandEntry] = commands
    matched: CommandEntry | None = None
    canonical_path: list[str] = []
    consumed = 0

    for token in tokens:
        entry = _find_entry(token, level)
        if entry is None:
            break
        matched = entry
        canonical_path.append(entry.name)
        consumed += 1
        if entry.sub_commands is None:
            break
        level = entry.sub_commands

    subcommand = " ".join(canonical_path[1:]) if len(canonical_path) > 1 else None
    return MatchResult(
        matched=matched,
        args=" ".join(tokens[consumed:]),
        canonical_path=tuple(canonical_path),
        subcommand=subcommand,
    )
