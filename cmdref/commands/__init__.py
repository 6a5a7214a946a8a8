"""斜杠命令系统：命令树匹配、命令表、相似度推荐与执行记录。"""

from cmdref.commands.execution import (
    SlashCommandExecutionResult,
    SlashCommandStatus,
    log_slash_command_execution,
)
from cmdref.commands.matcher import (
    DEFAULT_SIGIL,
    CommandEntry,
    MatchResult,
    is_slash_command,
    match_command,
)
from cmdref.commands.suggest import suggest_for_match, suggest_similar_commands
from cmdref.commands.table import (
    DEFAULT_COMMANDS,
    CommandTableError,
    all_invocations,
    command_table_from_dicts,
    find_alias_conflicts,
    iter_command_paths,
    load_command_table,
)

__all__ = [
    "DEFAULT_COMMANDS",
    "DEFAULT_SIGIL",
    "CommandEntry",
    "CommandTableError",
    "MatchResult",
    "SlashCommandExecutionResult",
    "SlashCommandStatus",
    "all_invocations",
    "command_table_from_dicts",
    "find_alias_conflicts",
    "is_slash_command",
    "iter_command_paths",
    "load_command_table",
    "log_slash_command_execution",
    "match_command",
    "suggest_for_match",
    "suggest_similar_commands",
]
