"""命令表构建与遍历。

作为 CLI 与匹配器的共享数据源：
- 从 JSON / dict 构建 CommandEntry 树
- 深度优先遍历，生成补全建议与帮助文案
- 检查同层别名冲突（匹配器本身不去重，只按表内顺序取第一个）
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Iterator, Mapping, Sequence

from cmdref.commands.matcher import DEFAULT_SIGIL, CommandEntry

logger = logging.getLogger(__name__)


class CommandTableError(ValueError):
    """命令表格式错误时抛出的异常。"""


DEFAULT_COMMANDS: tuple[CommandEntry, ...] = (
    CommandEntry("help", alt_names=("?",), description="显示帮助"),
    CommandEntry(
        "memory",
        description="记忆管理",
        sub_commands=(
            CommandEntry("add", description="添加记忆"),
            CommandEntry("show", alt_names=("list",), description="查看记忆"),
            CommandEntry("refresh", description="重新加载记忆"),
        ),
    ),
    CommandEntry("clear", description="清除对话历史"),
    CommandEntry("quit", alt_names=("exit",), description="退出"),
)


def _pick(item: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        if key in item:
            return item[key]
    return None


def _entry_from_mapping(item: object, location: str) -> CommandEntry:
    if not isinstance(item, Mapping):
        raise CommandTableError(f"{location}：命令定义必须为对象，当前值: {item!r}")

    name = item.get("name")
    if not isinstance(name, str) or not name.strip():
        raise CommandTableError(f"{location}：name 必须为非空字符串")
    name = name.strip()

    raw_alt = _pick(item, "altNames", "alt_names") or ()
    if not isinstance(raw_alt, (list, tuple)) or not all(
        isinstance(a, str) for a in raw_alt
    ):
        raise CommandTableError(f"{location}（{name}）：altNames 必须为字符串列表")
    alt_names = tuple(a.strip() for a in raw_alt if a.strip())

    description = item.get("description", "")
    if not isinstance(description, str):
        raise CommandTableError(f"{location}（{name}）：description 必须为字符串")

    raw_subs = _pick(item, "subCommands", "sub_commands")
    sub_commands: tuple[CommandEntry, ...] | None = None
    if raw_subs is not None:
        if not isinstance(raw_subs, (list, tuple)):
            raise CommandTableError(f"{location}（{name}）：subCommands 必须为列表")
        sub_commands = tuple(
            _entry_from_mapping(sub, f"{location}.{name}[{i}]")
            for i, sub in enumerate(raw_subs)
        )

    return CommandEntry(
        name=name,
        alt_names=alt_names,
        sub_commands=sub_commands,
        description=description,
    )


def command_table_from_dicts(items: Sequence[object]) -> tuple[CommandEntry, ...]:
    """从 dict 列表构建命令表。

    每项支持 ``name``、``altNames``/``alt_names``、
    ``subCommands``/``sub_commands``、``description`` 字段。

    Raises:
        CommandTableError: 字段缺失或类型错误
    """
    if not isinstance(items, (list, tuple)):
        raise CommandTableError("命令表必须为列表")
    return tuple(
        _entry_from_mapping(item, f"commands[{i}]") for i, item in enumerate(items)
    )


def load_command_table(path: str | Path) -> tuple[CommandEntry, ...]:
    """读取 JSON 命令表文件。"""
    file_path = Path(path).expanduser()
    try:
        data = json.loads(file_path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise CommandTableError(f"无法读取命令表：{file_path}：{exc}") from exc
    except json.JSONDecodeError as exc:
        raise CommandTableError(f"命令表不是合法 JSON：{file_path}：{exc}") from exc
    commands = command_table_from_dicts(data)
    for warning in find_alias_conflicts(commands):
        logger.warning("命令表冲突：%s", warning)
    logger.debug("已加载命令表 %s（%d 个根命令）", file_path, len(commands))
    return commands


def iter_command_paths(
    commands: Sequence[CommandEntry],
    parent: tuple[str, ...] = (),
) -> Iterator[tuple[tuple[str, ...], CommandEntry]]:
    """按表内顺序深度优先遍历，产出 (canonical_path, entry)。"""
    for entry in commands:
        path = (*parent, entry.name)
        yield path, entry
        if entry.sub_commands:
            yield from iter_command_paths(entry.sub_commands, path)


def all_invocations(
    commands: Sequence[CommandEntry],
    sigil: str = DEFAULT_SIGIL,
) -> tuple[str, ...]:
    """列出所有可输入的命令写法（含别名），如 ``/memory list``。"""
    spellings: list[str] = []

    def _walk(level: Sequence[CommandEntry], prefixes: list[str]) -> None:
        for entry in level:
            current = [f"{p} {n}" if p else n for p in prefixes for n in entry.all_names]
            spellings.extend(current)
            if entry.sub_commands:
                _walk(entry.sub_commands, current)

    _walk(commands, [""])
    return tuple(dict.fromkeys(sigil + s for s in spellings))


def find_alias_conflicts(commands: Sequence[CommandEntry]) -> list[str]:
    """返回同层命名冲突说明（重复主名称、别名遮蔽主名称、重复别名）。"""
    conflicts: list[str] = []

    def _check(level: Sequence[CommandEntry], parent: tuple[str, ...]) -> None:
        where = " ".join(parent) or "<root>"
        primary: set[str] = set()
        for entry in level:
            if entry.name in primary:
                conflicts.append(f"{where}: 主名称 {entry.name!r} 重复")
            primary.add(entry.name)

        alias_owner: dict[str, str] = {}
        for entry in level:
            for alias in entry.alt_names:
                if alias in primary:
                    conflicts.append(
                        f"{where}: {entry.name!r} 的别名 {alias!r} 与主名称冲突"
                    )
                elif alias in alias_owner and alias_owner[alias] != entry.name:
                    conflicts.append(
                        f"{where}: 别名 {alias!r} 同时属于 "
                        f"{alias_owner[alias]!r} 与 {entry.name!r}"
                    )
                else:
                    alias_owner.setdefault(alias, entry.name)

        for entry in level:
            if entry.sub_commands:
                _check(entry.sub_commands, (*parent, entry.name))

    _check(commands, ())
    return conflicts
