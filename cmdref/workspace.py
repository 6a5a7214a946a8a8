"""工作区上下文：多根目录边界判定与忽略规则查询。

LocalWorkspace 是 WorkspaceOracle 的本地文件系统实现，供
resolve_reference_paths 使用。忽略文件按 (根目录, 文件名) 缓存，
首次查询时读取。
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Iterable

from cmdref.ignore import (
    DEFAULT_APP_IGNORE_FILE,
    DEFAULT_GIT_PATTERNS,
    GIT_IGNORE_FILE,
    IgnoreRules,
)

if TYPE_CHECKING:
    from cmdref.config import CmdRefConfig

logger = logging.getLogger(__name__)


class WorkspaceError(Exception):
    """工作区目录不存在或不是目录时抛出的异常。"""


@dataclass(frozen=True)
class FileFilteringOptions:
    """忽略规则开关。"""

    respect_git_ignore: bool = True
    respect_app_ignore: bool = True


def _resolve_dir(directory: str | os.PathLike[str]) -> Path:
    path = Path(directory).expanduser().resolve()
    if not path.exists():
        raise WorkspaceError(f"工作区目录不存在：{directory}")
    if not path.is_dir():
        raise WorkspaceError(f"工作区路径不是目录：{directory}")
    return path


class WorkspaceContext:
    """有序的工作区根目录集合，第一个为主目录。"""

    def __init__(
        self,
        directory: str | os.PathLike[str],
        additional_directories: Iterable[str | os.PathLike[str]] = (),
    ) -> None:
        self._directories: list[Path] = []
        self.add_directory(directory)
        for extra in additional_directories:
            self.add_directory(extra)

    def add_directory(self, directory: str | os.PathLike[str]) -> None:
        """追加根目录，重复目录忽略。"""
        path = _resolve_dir(directory)
        if path not in self._directories:
            self._directories.append(path)

    @property
    def primary(self) -> Path:
        return self._directories[0]

    def get_directories(self) -> tuple[str, ...]:
        return tuple(str(d) for d in self._directories)

    def to_absolute(self, path: str) -> Path:
        """相对路径基于主目录展开，结果已规范化（不要求存在）。"""
        raw = Path(path)
        if not raw.is_absolute():
            raw = self.primary / raw
        return raw.resolve(strict=False)

    def find_root(self, path: str) -> Path | None:
        """返回包含 path 的第一个根目录，不在任何根目录内时返回 None。"""
        resolved = self.to_absolute(path)
        for root in self._directories:
            try:
                resolved.relative_to(root)
            except ValueError:
                continue
            return root
        return None

    def is_path_within_workspace(self, path: str) -> bool:
        return self.find_root(path) is not None


class FileDiscovery:
    """按工作区根目录读取并缓存 git / app 忽略规则。"""

    def __init__(
        self,
        context: WorkspaceContext,
        app_ignore_file: str = DEFAULT_APP_IGNORE_FILE,
    ) -> None:
        self._context = context
        self._app_ignore_file = app_ignore_file
        self._cache: dict[tuple[Path, str], IgnoreRules] = {}

    def _rules(self, root: Path, filename: str) -> IgnoreRules:
        key = (root, filename)
        rules = self._cache.get(key)
        if rules is None:
            defaults = DEFAULT_GIT_PATTERNS if filename == GIT_IGNORE_FILE else ()
            rules = IgnoreRules.from_file(root / filename, defaults=defaults)
            self._cache[key] = rules
        return rules

    def should_ignore_file(
        self,
        path: str,
        *,
        respect_git_ignore: bool = True,
        respect_app_ignore: bool = True,
    ) -> bool:
        """按开启的规则集判断路径是否应被忽略；工作区外的路径不判定。"""
        root = self._context.find_root(path)
        if root is None:
            return False
        absolute = self._context.to_absolute(path)
        relative = absolute.relative_to(root).as_posix()
        is_dir = path.endswith(("/", os.sep)) or absolute.is_dir()

        if respect_git_ignore and self._rules(root, GIT_IGNORE_FILE).is_ignored(
            relative, is_dir=is_dir
        ):
            return True
        if respect_app_ignore and self._rules(root, self._app_ignore_file).is_ignored(
            relative, is_dir=is_dir
        ):
            return True
        return False

    def clear_cache(self) -> None:
        self._cache.clear()


class LocalWorkspace:
    """基于本地文件系统的 WorkspaceOracle 实现。"""

    def __init__(
        self,
        context: WorkspaceContext,
        options: FileFilteringOptions | None = None,
        *,
        app_ignore_file: str = DEFAULT_APP_IGNORE_FILE,
    ) -> None:
        options = options or FileFilteringOptions()
        self.context = context
        self.discovery = FileDiscovery(context, app_ignore_file=app_ignore_file)
        self.respect_git_ignore = options.respect_git_ignore
        self.respect_app_ignore = options.respect_app_ignore

    @classmethod
    def from_config(cls, config: CmdRefConfig) -> LocalWorkspace:
        primary, *extra = config.workspace_dirs
        context = WorkspaceContext(primary, extra)
        logger.debug("工作区根目录：%s", ", ".join(context.get_directories()))
        return cls(
            context,
            FileFilteringOptions(
                respect_git_ignore=config.respect_git_ignore,
                respect_app_ignore=config.respect_app_ignore,
            ),
            app_ignore_file=config.app_ignore_file,
        )

    def is_path_within_workspace(self, path: str) -> bool:
        return self.context.is_path_within_workspace(path)

    def should_ignore_file(
        self,
        path: str,
        *,
        respect_git_ignore: bool,
        respect_app_ignore: bool,
    ) -> bool:
        return self.discovery.should_ignore_file(
            path,
            respect_git_ignore=respect_git_ignore,
            respect_app_ignore=respect_app_ignore,
        )

    def get_directories(self) -> tuple[str, ...]:
        return self.context.get_directories()
