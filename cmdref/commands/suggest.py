"""命令相似度推荐。"""

from __future__ import annotations

import os
from typing import Sequence

from cmdref.commands.matcher import DEFAULT_SIGIL, CommandEntry, MatchResult

# 编辑相似度低于该值的候选视为无关
_MIN_EDIT_SCORE = 0.3


def suggest_similar_commands(
    user_input: str,
    known_commands: Sequence[str],
    *,
    max_results: int = 3,
) -> list[str]:
    """基于前缀与编辑距离返回最相似的已知命令。"""
    typed = " ".join(user_input.lower().split())
    if not typed:
        return []
    scored = [(_similarity(typed, c.lower()), c) for c in known_commands]
    scored = [item for item in scored if item[0] > 0]
    scored.sort(key=lambda x: -x[0])
    return [s[1] for s in scored[:max_results]]


def suggest_for_match(
    match: MatchResult,
    commands: Sequence[CommandEntry],
    *,
    sigil: str = DEFAULT_SIGIL,
    max_results: int = 3,
) -> list[str]:
    """命令树在某一层未命中时，用首个未命中 token 与该层名称（含别名）比较。

    返回完整写法，如 ``/memory add``。已命中叶子命令时剩余 token 是参数，
    不给建议。
    """
    if not match.args:
        return []
    if match.matched is None:
        level: Sequence[CommandEntry] = commands
    elif match.matched.sub_commands is None:
        return []
    else:
        level = match.matched.sub_commands

    token = match.args.split()[0].lower()
    prefix = sigil + "".join(f"{name} " for name in match.canonical_path)
    best: dict[str, float] = {}
    for entry in level:
        for name in entry.all_names:
            score = _similarity(token, name.lower())
            if score > best.get(prefix + name, 0.0):
                best[prefix + name] = score
    ranked = sorted(best.items(), key=lambda item: -item[1])
    return [spelling for spelling, _ in ranked[:max_results]]


def _similarity(typed: str, candidate: str) -> float:
    """相似度分数（0~1）：公共前缀占 0.4，编辑距离占 0.6。"""
    if typed == candidate:
        return 1.0
    longest = max(len(typed), len(candidate))
    prefix = len(os.path.commonprefix([typed, candidate]))
    edit = 1.0 - _edit_distance(typed, candidate) / longest
    if edit < _MIN_EDIT_SCORE:
        return 0.0
    return 0.4 * prefix / longest + 0.6 * edit


def _edit_distance(a: str, b: str) -> int:
    """Levenshtein 编辑距离（单行滚动）。"""
    row = list(range(len(b) + 1))
    for i, ca in enumerate(a, 1):
        diag, row[0] = row[0], i
        for j, cb in enumerate(b, 1):
            diag, row[j] = row[j], min(row[j] + 1, row[j - 1] + 1, diag + (ca != cb))
    return row[-1]
