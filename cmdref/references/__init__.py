"""@ 引用系统（Reference System）。

提供 @path 语法的分词与工作区路径归类。
"""

from cmdref.references.parser import (
    ParsedReference,
    Segment,
    SegmentKind,
    escape_path,
    tokenize,
    unescape_path,
)
from cmdref.references.resolver import (
    IgnoredPath,
    IgnoreReason,
    PathResolutionOutcome,
    ResolvedPath,
    WorkspaceOracle,
    resolve_reference_paths,
)

__all__ = [
    "IgnoreReason",
    "IgnoredPath",
    "ParsedReference",
    "PathResolutionOutcome",
    "ResolvedPath",
    "Segment",
    "SegmentKind",
    "WorkspaceOracle",
    "escape_path",
    "resolve_reference_paths",
    "tokenize",
    "unescape_path",
]
