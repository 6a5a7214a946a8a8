"""工作区上下文与忽略规则查询测试。"""

from __future__ import annotations

from pathlib import Path

import pytest

from cmdref.config import CmdRefConfig
from cmdref.workspace import (
    FileDiscovery,
    FileFilteringOptions,
    LocalWorkspace,
    WorkspaceContext,
    WorkspaceError,
)


@pytest.fixture
def roots(tmp_path: Path) -> tuple[Path, Path]:
    """创建两个工作区根目录。"""
    base = tmp_path.resolve()
    first = base / "first"
    second = base / "second"
    first.mkdir()
    second.mkdir()
    return first, second


class TestWorkspaceContext:
    def test_missing_directory_rejected(self, tmp_path: Path) -> None:
        with pytest.raises(WorkspaceError, match="不存在"):
            WorkspaceContext(tmp_path / "nope")

    def test_file_rejected(self, tmp_path: Path) -> None:
        target = tmp_path / "file.txt"
        target.touch()
        with pytest.raises(WorkspaceError, match="不是目录"):
            WorkspaceContext(target)

    def test_directories_ordered_and_deduplicated(self, roots: tuple[Path, Path]) -> None:
        first, second = roots
        ctx = WorkspaceContext(first, [second, first])
        assert ctx.get_directories() == (str(first), str(second))
        assert ctx.primary == first

    def test_add_directory(self, roots: tuple[Path, Path]) -> None:
        first, second = roots
        ctx = WorkspaceContext(first)
        ctx.add_directory(second)
        assert ctx.get_directories()[-1] == str(second)

    def test_relative_path_inside(self, roots: tuple[Path, Path]) -> None:
        ctx = WorkspaceContext(roots[0])
        assert ctx.is_path_within_workspace("src/missing.py")
        assert ctx.is_path_within_workspace("a/../b.txt")

    def test_relative_path_escaping(self, roots: tuple[Path, Path]) -> None:
        ctx = WorkspaceContext(roots[0])
        assert not ctx.is_path_within_workspace("../x.txt")

    def test_relative_path_into_second_root(self, roots: tuple[Path, Path]) -> None:
        first, second = roots
        ctx = WorkspaceContext(first, [second])
        assert ctx.find_root("../second/x.txt") == second

    def test_absolute_paths(self, roots: tuple[Path, Path]) -> None:
        first, second = roots
        ctx = WorkspaceContext(first, [second])
        assert ctx.find_root(str(second / "a.py")) == second
        assert not ctx.is_path_within_workspace(str(first.parent / "a.py"))

    def test_root_itself_inside(self, roots: tuple[Path, Path]) -> None:
        ctx = WorkspaceContext(roots[0])
        assert ctx.is_path_within_workspace(str(roots[0]))

    def test_tilde_not_expanded(self, roots: tuple[Path, Path]) -> None:
        ctx = WorkspaceContext(roots[0])
        assert ctx.to_absolute("~/notes.txt") == roots[0] / "~" / "notes.txt"
        assert ctx.is_path_within_workspace("~/notes.txt")


class TestFileDiscovery:
    def test_git_and_app_rules_separate(self, roots: tuple[Path, Path]) -> None:
        first, _ = roots
        (first / ".gitignore").write_text("*.log\n", encoding="utf-8")
        (first / ".cmdrefignore").write_text("secret/\n", encoding="utf-8")
        discovery = FileDiscovery(WorkspaceContext(first))

        assert discovery.should_ignore_file(
            "a.log", respect_git_ignore=True, respect_app_ignore=False
        )
        assert not discovery.should_ignore_file(
            "a.log", respect_git_ignore=False, respect_app_ignore=True
        )
        assert discovery.should_ignore_file(
            "secret/key.pem", respect_git_ignore=False, respect_app_ignore=True
        )
        assert not discovery.should_ignore_file(
            "a.log", respect_git_ignore=False, respect_app_ignore=False
        )

    def test_rules_per_root(self, roots: tuple[Path, Path]) -> None:
        first, second = roots
        (second / ".gitignore").write_text("*.tmp\n", encoding="utf-8")
        discovery = FileDiscovery(WorkspaceContext(first, [second]))
        assert not discovery.should_ignore_file("x.tmp")
        assert discovery.should_ignore_file(str(second / "x.tmp"))

    def test_existing_directory_matches_dir_pattern(self, roots: tuple[Path, Path]) -> None:
        first, _ = roots
        (first / "out").mkdir()
        (first / ".gitignore").write_text("out/\n", encoding="utf-8")
        discovery = FileDiscovery(WorkspaceContext(first))
        assert discovery.should_ignore_file("out")

    def test_custom_app_ignore_file(self, roots: tuple[Path, Path]) -> None:
        first, _ = roots
        (first / ".myignore").write_text("notes.md\n", encoding="utf-8")
        discovery = FileDiscovery(WorkspaceContext(first), app_ignore_file=".myignore")
        assert discovery.should_ignore_file("notes.md", respect_git_ignore=False)

    def test_outside_path_not_ignored(self, roots: tuple[Path, Path]) -> None:
        first, _ = roots
        (first / ".gitignore").write_text("*\n", encoding="utf-8")
        discovery = FileDiscovery(WorkspaceContext(first))
        assert not discovery.should_ignore_file("../elsewhere.txt")

    def test_rules_cached_until_cleared(self, roots: tuple[Path, Path]) -> None:
        first, _ = roots
        gitignore = first / ".gitignore"
        gitignore.write_text("*.log\n", encoding="utf-8")
        discovery = FileDiscovery(WorkspaceContext(first))
        assert discovery.should_ignore_file("a.log")

        gitignore.write_text("", encoding="utf-8")
        assert discovery.should_ignore_file("a.log")

        discovery.clear_cache()
        assert not discovery.should_ignore_file("a.log")


class TestLocalWorkspace:
    def test_from_config(self, roots: tuple[Path, Path]) -> None:
        first, second = roots
        config = CmdRefConfig(
            workspace_dirs=(str(first), str(second)),
            respect_git_ignore=False,
            respect_app_ignore=True,
        )
        workspace = LocalWorkspace.from_config(config)
        assert workspace.get_directories() == (str(first), str(second))
        assert workspace.respect_git_ignore is False
        assert workspace.respect_app_ignore is True

    def test_default_options(self, roots: tuple[Path, Path]) -> None:
        workspace = LocalWorkspace(WorkspaceContext(roots[0]))
        assert workspace.respect_git_ignore is True
        assert workspace.respect_app_ignore is True

    def test_delegates_queries(self, roots: tuple[Path, Path]) -> None:
        first, _ = roots
        (first / ".gitignore").write_text("*.log\n", encoding="utf-8")
        workspace = LocalWorkspace(
            WorkspaceContext(first), FileFilteringOptions(respect_app_ignore=False)
        )
        assert workspace.is_path_within_workspace("a.log")
        assert workspace.should_ignore_file(
            "a.log", respect_git_ignore=True, respect_app_ignore=False
        )
        assert not workspace.is_path_within_workspace("../a.log")
