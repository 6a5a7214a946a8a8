"""CLI 配色主题：蓝色系亮色主题 + 极简风格符号。"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Theme:
    """CLI 配色与符号常量。"""

    # 主色
    PRIMARY_LIGHT: str = "#58a6ff"

    # 辅助色
    CYAN: str = "#0078d4"
    GOLD: str = "#e5a100"
    RED: str = "#d13438"

    # 文本样式关键字（用于 Rich markup）
    DIM: str = "dim"
    BOLD: str = "bold"

    # 极简风格符号
    TREE_MID: str = "├"
    TREE_END: str = "└"
    SUCCESS: str = "✓"
    FAILURE: str = "✗"
    WARNING: str = "!"


# 全局单例
THEME = Theme()
