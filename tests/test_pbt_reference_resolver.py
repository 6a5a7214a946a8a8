"""属性测试：@path 解析器的归类完整性。

对任意路径片段批次与任意 oracle 配置，每个非哨兵片段恰好落入
resolved / ignored / failed 之一，且各类内部保持输入顺序。
"""

from __future__ import annotations

from hypothesis import given
from hypothesis import strategies as st

from cmdref.references import (
    IgnoreReason,
    Segment,
    SegmentKind,
    resolve_reference_paths,
)
from tests.test_reference_resolver import FakeOracle

_NAMES = ["a.py", "b.md", "src/c.ts", "../d.txt", "e.log", "/abs/f.py", "g"]

_tokens = st.lists(
    st.sampled_from(["@"] + [f"@{n}" for n in _NAMES]),
    max_size=12,
)
_subset = st.lists(st.sampled_from(_NAMES), unique=True)


@given(
    tokens=_tokens,
    outside=_subset,
    git_ignored=_subset,
    app_ignored=_subset,
    respect_git=st.booleans(),
    respect_app=st.booleans(),
    directories=st.lists(st.sampled_from(["/ws", "/abs", "/other"]), max_size=3),
)
def test_pbt_classification_partition(
    tokens: list[str],
    outside: list[str],
    git_ignored: list[str],
    app_ignored: list[str],
    respect_git: bool,
    respect_app: bool,
    directories: list[str],
) -> None:
    oracle = FakeOracle(
        directories,
        outside=outside,
        git_ignored=git_ignored,
        app_ignored=app_ignored,
        respect_git_ignore=respect_git,
        respect_app_ignore=respect_app,
    )
    segments = [Segment(SegmentKind.AT_PATH, t) for t in tokens]
    outcome = resolve_reference_paths(segments, oracle)

    non_sentinel = [t for t in tokens if t != "@"]
    assert outcome.total == len(non_sentinel)

    # 逐个重放归类，校验每个片段落入且仅落入一类
    resolved = iter(outcome.resolved)
    ignored = iter(outcome.ignored)
    failed = iter(outcome.failed)
    for token in non_sentinel:
        name = token[1:]
        if name in outside:
            assert next(failed) == name
            continue
        git_hit = respect_git and name in git_ignored
        app_hit = respect_app and name in app_ignored
        if git_hit or app_hit:
            item = next(ignored)
            assert item.path == name
            if git_hit and app_hit:
                assert item.reason is IgnoreReason.BOTH
            else:
                assert item.reason is (IgnoreReason.GIT if git_hit else IgnoreReason.APP)
            continue
        if not directories:
            assert next(failed) == name
        else:
            assert next(resolved).original_token == token

    assert next(resolved, None) is None
    assert next(ignored, None) is None
    assert next(failed, None) is None
