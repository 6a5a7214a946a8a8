"""CLI 包：极简风格的命令行界面。"""


def main() -> None:
    """CLI 入口函数（延迟导入，避免循环依赖）。"""
    try:
        import rich  # noqa: F401
    except ImportError:
        import sys
        print(
            "错误：CLI 模式缺少依赖 rich。\n"
            "请使用以下命令安装：\n"
            "  pip install cmdref",
            file=sys.stderr,
        )
        sys.exit(1)

    from cmdref.cli.main import main as _main

    _main()


__all__ = ["main"]
