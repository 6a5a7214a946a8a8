"""属性测试：斜杠命令匹配。

- canonical_path 只包含主名称，即使输入的是别名
- 同层输入同时是 A 的别名与 B 的主名称时，总是选中 B
- 已消费 token 与 args 拼接还原输入 token
"""

from __future__ import annotations

from hypothesis import assume, given
from hypothesis import strategies as st

from cmdref.commands.matcher import CommandEntry, match_command

_name = st.text(alphabet="abcdefghijklmnopqrstuvwxyz", min_size=1, max_size=6)


@st.composite
def _level(draw: st.DrawFn, depth: int = 0) -> tuple[CommandEntry, ...]:
    """生成同层主名称、别名互不冲突的命令树。"""
    names = draw(st.lists(_name, min_size=1, max_size=4, unique=True))
    aliases = draw(
        st.lists(_name, max_size=4, unique=True).filter(
            lambda xs: not set(xs) & set(names)
        )
    )
    entries: list[CommandEntry] = []
    for i, name in enumerate(names):
        own_aliases = tuple(a for j, a in enumerate(aliases) if j % len(names) == i)
        subs = None
        if depth < 2 and draw(st.booleans()):
            subs = draw(_level(depth + 1))
        entries.append(CommandEntry(name, alt_names=own_aliases, sub_commands=subs))
    return tuple(entries)


@st.composite
def _walk(draw: st.DrawFn) -> tuple[tuple[CommandEntry, ...], list[str], list[str]]:
    """沿命令树随机选择一条路径，每层随机使用主名称或别名。

    返回 (table, typed_tokens, expected_canonical_path)。
    """
    table = draw(_level())
    level: tuple[CommandEntry, ...] | None = table
    typed: list[str] = []
    canonical: list[str] = []
    while level:
        entry = draw(st.sampled_from(level))
        typed.append(draw(st.sampled_from(entry.all_names)))
        canonical.append(entry.name)
        level = entry.sub_commands
        if not draw(st.booleans()):
            break
    return table, typed, canonical


@given(data=_walk(), extra=st.lists(st.text(alphabet="0123456789", min_size=1, max_size=4), max_size=3))
def test_pbt_canonical_path_uses_primary_names(
    data: tuple[tuple[CommandEntry, ...], list[str], list[str]],
    extra: list[str],
) -> None:
    table, typed, canonical = data
    r = match_command("/" + " ".join(typed + extra), table)
    assert list(r.canonical_path) == canonical
    assert r.matched is not None and r.matched.name == canonical[-1]
    if len(canonical) > 1:
        assert r.subcommand == " ".join(canonical[1:])
    else:
        assert r.subcommand is None
    # 数字 token 不会命中任何命令，始终作为参数
    assert r.args == " ".join(extra)


@given(
    alias=_name,
    other=_name,
    swap=st.booleans(),
    args=st.lists(st.text(alphabet="0123456789", min_size=1, max_size=3), max_size=3),
)
def test_pbt_primary_name_priority(alias: str, other: str, swap: bool, args: list[str]) -> None:
    assume(alias != other)
    a = CommandEntry(other, alt_names=(alias,))
    b = CommandEntry(alias)
    table = (b, a) if swap else (a, b)
    r = match_command(" ".join(["/" + alias, *args]), table)
    assert r.matched is b
    assert r.canonical_path == (alias,)


@given(
    table=_level(),
    tokens=st.lists(_name, max_size=6),
)
def test_pbt_consumed_plus_args_is_input(table: tuple[CommandEntry, ...], tokens: list[str]) -> None:
    r = match_command("/" + " ".join(tokens), table)
    consumed = len(r.canonical_path)
    assert r.args == " ".join(tokens[consumed:])
    assert (r.matched is None) == (consumed == 0)
