#!/usr/bin/env python3
"""
SQL Log Viewer CLI

Recovers executed SQL from DAO application logs: shows every execution of a
transaction ID with its parameters filled in, the most recent statement in
the file, or an index of all IDs.
"""
import argparse
import json
from typing import Any, Dict, List, Optional
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table

from engine.config import EngineConfig
from engine.logging import EngineLogger
from tools.components.sql_pretty_printer import display_sql
from tools.log_query_tool import LogQueryTool
from util.encoding import SUPPORTED_ENCODINGS, read_log_text

console = Console()


def render_index(result: Dict[str, Any]) -> None:
    """Print the ID index as a table."""
    table = Table(title=f"{result['id_count']} IDs with SQL")
    table.add_column("#", justify="right", style="dim")
    table.add_column("ID", style="bold")
    table.add_column("Params", justify="right")
    for n, info in enumerate(result["ids"], start=1):
        table.add_row(str(n), info["id"], str(info["parameter_set_count"]))
    console.print(table)


def _sql_block(sql: str, format_sql: bool) -> Syntax:
    return Syntax(display_sql(sql, format_sql), "sql", word_wrap=True)


def render_executions(result: Dict[str, Any], format_sql: bool) -> None:
    """Print each template group followed by its executions."""
    console.rule(f"id={result['id']} • {result['caller_name']}")
    groups: List[Dict[str, Any]] = result["groups"]

    for g_index, group in enumerate(groups, start=1):
        title = f"Template {g_index}/{len(groups)} ({group['execution_count']} execution(s))"
        console.print(Panel(_sql_block(group["template_sql"], format_sql), title=title))

        for execution in group["executions"]:
            subtitle = execution["timestamp"] or "no timestamp"
            if execution["fill_error"]:
                subtitle += f" • [yellow]unfilled: {escape(execution['fill_error'])}[/yellow]"
            console.print(Panel(
                _sql_block(execution["filled_sql"], format_sql),
                title=f"#{execution['sequence_index']}",
                subtitle=subtitle,
                border_style="green" if not execution["fill_error"] else "yellow",
            ))

    console.print("[bold]Parameters (last execution)[/bold]")
    console.print(result["formatted_params"].rstrip("\n"), markup=False)


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="sql-log-viewer",
        description="Recover executed SQL and parameters from DAO application logs",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s app.log --ids
  %(prog)s app.log --id 3f9a2c
  %(prog)s app.log --last --encoding UTF-8 --json
        """
    )
    parser.add_argument("logfile", help="Log file to read")
    target = parser.add_mutually_exclusive_group(required=True)
    target.add_argument("--id", dest="transaction_id", help="Show every execution of this transaction ID")
    target.add_argument("--last", action="store_true", help="Show the most recent statement in the log")
    target.add_argument("--ids", action="store_true", help="List all IDs that have SQL")
    parser.add_argument(
        "--encoding",
        default=None,
        help=f"Log file encoding (default: SHIFT_JIS; e.g. {', '.join(SUPPORTED_ENCODINGS)})"
    )
    parser.add_argument("--no-format", action="store_true", help="Do not break SQL onto multiple lines")
    parser.add_argument("--json", action="store_true", help="Print the raw result as JSON")
    parser.add_argument("--compact", action="store_true", help="With --json, print only a short summary")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    args = parser.parse_args(argv)

    try:
        config = EngineConfig()
    except ValueError as e:
        console.print(f"[red]Configuration error: {e}[/red]")
        return 1

    # Command line flags take precedence over SQLLOG_* environment variables
    if args.encoding:
        config.encoding = args.encoding
    if args.no_format:
        config.format_sql = False
    if args.debug:
        config.debug_enabled = True
        config.log_level = "DEBUG"

    EngineLogger.configure(level=config.log_level)

    try:
        log_text = read_log_text(args.logfile, config.encoding)
    except OSError as e:
        console.print(f"[red]Cannot read log file: {e}[/red]")
        return 1

    if args.ids:
        mode = "index"
    elif args.last:
        mode = "last"
    else:
        mode = "id"

    tool = LogQueryTool(config=config)
    result = tool.execute_with_debug({
        "log_text": log_text,
        "mode": mode,
        "id": args.transaction_id,
        "format_sql": config.format_sql,
    })

    if args.json:
        output = tool.create_compact_output(result) if args.compact else result
        console.print_json(json.dumps(output, ensure_ascii=False))
        return 1 if "error" in result else 0

    if "error" in result:
        console.print(f"[red]{result['error']}[/red]")
        return 1

    if mode == "index":
        render_index(result)
    else:
        render_executions(result, config.format_sql)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
