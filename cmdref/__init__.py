"""cmdref：@path 引用分词、工作区路径归类与斜杠命令匹配。"""

from cmdref.commands import CommandEntry, MatchResult, match_command
from cmdref.references import (
    ParsedReference,
    PathResolutionOutcome,
    Segment,
    SegmentKind,
    resolve_reference_paths,
    tokenize,
)

__version__ = "0.1.0"

__all__ = [
    "CommandEntry",
    "MatchResult",
    "ParsedReference",
    "PathResolutionOutcome",
    "Segment",
    "SegmentKind",
    "__version__",
    "match_command",
    "resolve_reference_paths",
    "tokenize",
]
