"""@ 引用分词器：将用户输入拆分为文本片段与 @path 片段。

扫描规则：
- 未转义的 ``@`` 开始一个路径标记
- 路径标记在第一个未转义的空白或 ``,;!?()[]{}`` 处结束
- ``.`` 仅在其后为空白或输入结尾时结束标记（保留 ``.txt`` 等扩展名）
- 反斜杠转义下一个字符；路径标记内容经 unescape_path 处理
- 文本片段原样保留，仅过滤 strip() 后为空的片段
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class SegmentKind(str, Enum):
    """片段类型。"""

    TEXT = "text"
    AT_PATH = "at_path"


@dataclass(frozen=True)
class Segment:
    """输入中的单个片段（文本或 @path）。"""

    kind: SegmentKind
    content: str


@dataclass(frozen=True)
class ParsedReference:
    """分词结果。"""

    segments: tuple[Segment, ...]       # 按出现顺序排列的全部片段
    path_segments: tuple[Segment, ...]  # segments 中 AT_PATH 类型的有序子序列

    @property
    def has_references(self) -> bool:
        return bool(self.path_segments)


# ── 常量 ──────────────────────────────────────────────────

_ESCAPE_CHAR = "\\"
_AT_CHAR = "@"

# 路径标记终止字符（空白单独判断）
_TERMINATORS = frozenset(",;!?()[]{}")


def _is_terminator(text: str, index: int) -> bool:
    """判断 text[index] 是否结束当前路径标记（调用方已排除转义）。"""
    char = text[index]
    if char.isspace() or char in _TERMINATORS:
        return True
    if char == ".":
        # 句末句点：后接空白或位于输入末尾
        next_index = index + 1
        return next_index >= len(text) or text[next_index].isspace()
    return False


def unescape_path(raw: str) -> str:
    """移除转义反斜杠，保留被转义的字符。

    输入可带 ``@`` 前缀，``@`` 原样保留。末尾孤立的反斜杠不做处理。
    """
    chars: list[str] = []
    in_escape = False
    last = len(raw) - 1
    for i, char in enumerate(raw):
        if in_escape:
            chars.append(char)
            in_escape = False
        elif char == _ESCAPE_CHAR and i < last:
            in_escape = True
        else:
            chars.append(char)
    return "".join(chars)


def escape_path(path: str) -> str:
    """为裸路径添加转义，使其作为 @ 引用时被完整识别为单个标记。"""
    chars: list[str] = []
    last = len(path) - 1
    for i, char in enumerate(path):
        if char == _ESCAPE_CHAR or char.isspace() or char in _TERMINATORS:
            chars.append(_ESCAPE_CHAR)
        elif char == "." and i == last:
            chars.append(_ESCAPE_CHAR)
        chars.append(char)
    return "".join(chars)


def _find_next_at(query: str, start: int) -> int:
    """从 start 开始查找下一个未转义的 ``@``，未找到返回 -1。"""
    in_escape = False
    for i in range(start, len(query)):
        char = query[i]
        if in_escape:
            in_escape = False
        elif char == _ESCAPE_CHAR:
            in_escape = True
        elif char == _AT_CHAR:
            return i
    return -1


def _find_path_end(query: str, at_index: int) -> int:
    """返回从 at_index 开始的路径标记的结束位置（不含）。"""
    end = at_index + 1
    in_escape = False
    while end < len(query):
        if in_escape:
            in_escape = False
        elif query[end] == _ESCAPE_CHAR:
            in_escape = True
        elif _is_terminator(query, end):
            break
        end += 1
    return end


def tokenize(query: str) -> ParsedReference:
    """将输入拆分为有序的文本 / @path 片段。

    对任意字符串都返回合法结果，空字符串返回空片段列表。
    """
    segments: list[Segment] = []
    current = 0

    while current < len(query):
        at_index = _find_next_at(query, current)
        if at_index == -1:
            segments.append(Segment(SegmentKind.TEXT, query[current:]))
            break

        if at_index > current:
            segments.append(Segment(SegmentKind.TEXT, query[current:at_index]))

        path_end = _find_path_end(query, at_index)
        segments.append(
            Segment(SegmentKind.AT_PATH, unescape_path(query[at_index:path_end]))
        )
        current = path_end

    # 相邻 @path 之间或首尾的纯空白文本不保留
    filtered = tuple(
        seg
        for seg in segments
        if not (seg.kind is SegmentKind.TEXT and not seg.content.strip())
    )
    return ParsedReference(
        segments=filtered,
        path_segments=tuple(
            seg for seg in filtered if seg.kind is SegmentKind.AT_PATH
        ),
    )
