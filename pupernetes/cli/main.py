#!/usr/bin/env python3
"""
pupernetes-core 命令行

- drain: 解析 --drain 选项串, 展示每个目标是否会被 drain
- notify: 向 systemd 发送就绪通知
"""

import json
import sys
from typing import List, Optional

from rich.console import Console
from rich.table import Table

from pupernetes.config import CoreConfig, load_config
from pupernetes.options.drain import DRAIN_TARGETS, DrainDirectives, resolve
from pupernetes.utils.errors import ConfigurationError, NotifyError
from pupernetes.utils.logging import setup_logging


console = Console()


def print_directives(value: str, directives: DrainDirectives):
    """打印 drain 解析结果"""
    table = Table(title=f"drain: {value!r}")
    table.add_column("目标")
    table.add_column("drain", justify="center")

    for target in DRAIN_TARGETS:
        mark = "[green]✅[/green]" if directives.is_enabled(target) else "[dim]-[/dim]"
        table.add_row(target, mark)

    console.print(table)

    if directives.wildcard_all:
        console.print("[dim]通配: all[/dim]")
    elif directives.wildcard_none:
        console.print("[dim]通配: none[/dim]")


def cmd_drain(config: CoreConfig, value: Optional[str], as_json: bool) -> int:
    value = config.drain if value is None else value
    directives = resolve(value)

    if as_json:
        console.print_json(json.dumps(directives.as_dict()))
    else:
        print_directives(value, directives)
    return 0


def cmd_notify(config: CoreConfig, status: Optional[str]) -> int:
    notifier = config.build_notifier()

    try:
        if status:
            notifier.notify_status(status)
        sent = notifier.notify_ready()
    except NotifyError as e:
        console.print(f"[red]❌ {e}[/red]")
        return 1

    if sent:
        console.print("[green]✅ 已通知 systemd[/green]")
    else:
        console.print("[yellow]⚠️  未配置 NOTIFY_SOCKET, 跳过通知[/yellow]")
    return 0


def build_parser():
    import argparse

    parser = argparse.ArgumentParser(
        prog="pupernetes-core",
        description="pupernetes 就绪状态与 drain 选项工具",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
示例:
  %(prog)s drain "none,pods"
  %(prog)s drain --json
  %(prog)s notify --status "apiserver ready"
        """
    )

    parser.add_argument(
        "--config",
        help="YAML 配置文件"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    drain = subparsers.add_parser("drain", help="解析 drain 选项串")
    drain.add_argument(
        "value",
        nargs="?",
        help="逗号分隔的 drain 选项 (默认取配置)"
    )
    drain.add_argument(
        "--json",
        action="store_true",
        help="以 JSON 输出"
    )

    notify = subparsers.add_parser("notify", help="向 systemd 发送就绪通知")
    notify.add_argument(
        "--status",
        help="附带的 STATUS 文本"
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """CLI 主入口"""
    args = build_parser().parse_args(argv)

    try:
        config = load_config(args.config)
    except ConfigurationError as e:
        console.print(f"[red]❌ {e}[/red]")
        return 2

    setup_logging(config.log_level)

    if args.command == "drain":
        return cmd_drain(config, args.value, args.json)
    return cmd_notify(config, args.status)


if __name__ == "__main__":
    sys.exit(main())
