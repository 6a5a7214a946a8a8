""".gitignore 风格的忽略规则解析与匹配。

支持：
- 通配符（``*``、``?``、``[...]``）只匹配单个路径片段，``**`` 匹配零或多层目录
- 目录专用模式（结尾 ``/``）
- 取反模式（开头 ``!``），后出现的规则优先
- 含 ``/`` 的模式按工作区相对路径锚定匹配，其余按单个路径片段匹配

不支持嵌套目录中的忽略文件，仅读取工作区根目录下的文件。
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from fnmatch import fnmatchcase
from pathlib import Path, PurePosixPath
from typing import Iterable

logger = logging.getLogger(__name__)

GIT_IGNORE_FILE = ".gitignore"
DEFAULT_APP_IGNORE_FILE = ".cmdrefignore"

# 版本控制目录本身总是按 git 规则忽略
DEFAULT_GIT_PATTERNS: tuple[str, ...] = (".git/",)


@dataclass(frozen=True)
class IgnorePattern:
    """单条忽略规则。"""

    pattern: str
    negated: bool = False
    dir_only: bool = False
    anchored: bool = False

    @classmethod
    def parse(cls, line: str) -> IgnorePattern | None:
        """解析忽略文件中的一行，空行与注释返回 None。"""
        text = line.rstrip("\n").rstrip()
        if not text or text.startswith("#"):
            return None

        negated = text.startswith("!")
        if negated:
            text = text[1:]
        elif text.startswith("\\#") or text.startswith("\\!"):
            text = text[1:]

        dir_only = text.endswith("/")
        text = text.rstrip("/")
        anchored = "/" in text
        text = text.lstrip("/")
        if not text:
            return None
        return cls(text, negated=negated, dir_only=dir_only, anchored=anchored)

    def matches(self, parts: tuple[str, ...], is_dir: bool) -> bool:
        """判断相对路径（已拆分为片段）或其任一上级目录是否命中本规则。"""
        segments = tuple(self.pattern.split("/"))
        for end in range(1, len(parts) + 1):
            prefix_is_dir = end < len(parts) or is_dir
            if self.dir_only and not prefix_is_dir:
                continue
            if self.anchored:
                if _match_segments(segments, parts[:end]):
                    return True
            elif fnmatchcase(parts[end - 1], self.pattern):
                return True
        return False


def _match_segments(pattern: tuple[str, ...], parts: tuple[str, ...]) -> bool:
    """逐段匹配：``*`` 不跨越 ``/``，``**`` 匹配零或多段（末尾的 ``**`` 至少一段）。"""
    if not pattern:
        return not parts
    head, rest = pattern[0], pattern[1:]
    if head == "**":
        start = 1 if not rest else 0
        return any(_match_segments(rest, parts[i:]) for i in range(start, len(parts) + 1))
    return bool(parts) and fnmatchcase(parts[0], head) and _match_segments(rest, parts[1:])


class IgnoreRules:
    """一组有序的忽略规则，最后命中的规则决定结果。"""

    def __init__(self, patterns: Iterable[IgnorePattern] = ()) -> None:
        self._patterns: tuple[IgnorePattern, ...] = tuple(patterns)

    @classmethod
    def from_lines(cls, lines: Iterable[str]) -> IgnoreRules:
        parsed = (IgnorePattern.parse(line) for line in lines)
        return cls(p for p in parsed if p is not None)

    @classmethod
    def from_file(cls, path: Path, defaults: Iterable[str] = ()) -> IgnoreRules:
        """读取忽略文件；文件不存在时仅包含 defaults。"""
        lines = list(defaults)
        try:
            content = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return cls.from_lines(lines)
        logger.debug("加载忽略文件：%s", path)
        lines.extend(content.splitlines())
        return cls.from_lines(lines)

    @property
    def patterns(self) -> tuple[IgnorePattern, ...]:
        return self._patterns

    def __bool__(self) -> bool:
        return bool(self._patterns)

    def is_ignored(self, relative_path: str, *, is_dir: bool = False) -> bool:
        """判断工作区相对路径是否被忽略。

        Args:
            relative_path: 以 ``/`` 或系统分隔符分隔的相对路径；
                以 ``/`` 结尾视为目录。
            is_dir: 路径本身是否为目录。
        """
        normalized = relative_path.replace("\\", "/")
        if normalized.endswith("/"):
            is_dir = True
        parts = tuple(
            p for p in PurePosixPath(normalized).parts if p not in ("", ".", "/")
        )
        if not parts:
            return False

        ignored = False
        for pattern in self._patterns:
            if pattern.matches(parts, is_dir):
                ignored = not pattern.negated
        return ignored
