"""@path 解析器：将路径片段归类为 resolved / ignored / failed。

每个非哨兵路径片段恰好落入三类之一。本模块不检查文件是否存在、
不展开 glob，也不读取文件内容；工作区边界与忽略规则查询委托给
注入的 WorkspaceOracle。oracle 抛出的异常原样向上传播。
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Protocol, Sequence

from cmdref.references.parser import Segment

logger = logging.getLogger(__name__)

# 孤立 @（后面没有路径名）
_SENTINEL = "@"


class IgnoreReason(str, Enum):
    """路径被忽略的原因。"""

    GIT = "git"
    APP = "app"
    BOTH = "both"


@dataclass(frozen=True)
class ResolvedPath:
    """解析成功的路径。"""

    original_token: str  # 原始标记（如 "@src/main.py"）
    resolved_spec: str   # 供读取使用的路径说明
    display_path: str    # 展示用相对路径
    absolute_path: str


@dataclass(frozen=True)
class IgnoredPath:
    """被忽略规则过滤的路径（记录裸路径名，不含 @）。"""

    path: str
    reason: IgnoreReason


@dataclass
class PathResolutionOutcome:
    """一批路径片段的归类结果。"""

    resolved: list[ResolvedPath] = field(default_factory=list)
    ignored: list[IgnoredPath] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.resolved) + len(self.ignored) + len(self.failed)


class WorkspaceOracle(Protocol):
    """工作区查询接口：边界判定、忽略规则、根目录列表。"""

    respect_git_ignore: bool
    respect_app_ignore: bool

    def is_path_within_workspace(self, path: str) -> bool: ...

    def should_ignore_file(
        self,
        path: str,
        *,
        respect_git_ignore: bool,
        respect_app_ignore: bool,
    ) -> bool: ...

    def get_directories(self) -> Sequence[str]: ...


def _ignore_reason(git_ignored: bool, app_ignored: bool) -> IgnoreReason | None:
    if git_ignored and app_ignored:
        return IgnoreReason.BOTH
    if git_ignored:
        return IgnoreReason.GIT
    if app_ignored:
        return IgnoreReason.APP
    return None


def _resolve_in_directory(path_name: str, directory: str) -> tuple[str, str]:
    """计算 (absolute_path, relative_path)。

    绝对路径的显示路径相对于 directory，可以以 ``..`` 开头；两侧先展开
    符号链接再比较。无法计算相对路径时（如 Windows 跨盘符）抛出 ValueError。
    """
    if os.path.isabs(path_name):
        absolute_path = os.path.normpath(path_name)
        relative = os.path.relpath(
            os.path.realpath(absolute_path), os.path.realpath(directory)
        )
        return absolute_path, relative
    return os.path.normpath(os.path.join(directory, path_name)), path_name


def resolve_reference_paths(
    path_segments: Iterable[Segment],
    oracle: WorkspaceOracle,
) -> PathResolutionOutcome:
    """按顺序归类每个 @path 片段。

    处理流程：
    1. 丢弃孤立的 ``@`` 哨兵
    2. 去掉 ``@`` 前缀；空路径名记为 failed
    3. 不在任何工作区根目录内的路径记为 failed
    4. 按 git / app 两套忽略规则分别判定，命中则记为 ignored
    5. 依次尝试各工作区目录，第一个计算成功的目录胜出，记为 resolved
    6. 所有目录均失败则记为 failed

    Args:
        path_segments: AT_PATH 类型的片段序列
        oracle: 工作区查询接口

    Returns:
        三类结果互不相交的 PathResolutionOutcome
    """
    outcome = PathResolutionOutcome()
    respect_git = oracle.respect_git_ignore
    respect_app = oracle.respect_app_ignore

    for segment in path_segments:
        original_token = segment.content
        if original_token == _SENTINEL:
            continue

        path_name = original_token[1:]
        if not path_name:
            outcome.failed.append(original_token)
            continue

        if not oracle.is_path_within_workspace(path_name):
            logger.debug("路径不在工作区内：%s", path_name)
            outcome.failed.append(path_name)
            continue

        git_ignored = respect_git and oracle.should_ignore_file(
            path_name, respect_git_ignore=True, respect_app_ignore=False
        )
        app_ignored = respect_app and oracle.should_ignore_file(
            path_name, respect_git_ignore=False, respect_app_ignore=True
        )
        reason = _ignore_reason(git_ignored, app_ignored)
        if reason is not None:
            logger.debug("路径被忽略（%s）：%s", reason.value, path_name)
            outcome.ignored.append(IgnoredPath(path=path_name, reason=reason))
            continue

        resolved: ResolvedPath | None = None
        for directory in oracle.get_directories():
            try:
                absolute_path, relative_path = _resolve_in_directory(
                    path_name, directory
                )
            except ValueError:
                continue
            resolved = ResolvedPath(
                original_token=original_token,
                resolved_spec=relative_path,
                display_path=relative_path,
                absolute_path=absolute_path,
            )
            break

        if resolved is None:
            logger.debug("路径无法在任何工作区目录下解析：%s", path_name)
            outcome.failed.append(path_name)
        else:
            outcome.resolved.append(resolved)

    return outcome
