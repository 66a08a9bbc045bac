"""Entry point for the script exporter — `script-exporter` console script."""

from __future__ import annotations

import argparse
import logging
import sys

import uvicorn
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from script_exporter.config import settings
from script_exporter.engine.runner import run_scripts
from script_exporter.errors import ScriptExporterError
from script_exporter.scripts.filter import filter_scripts
from script_exporter.scripts.merge import load_scripts, merge_configs

console = Console()
err_console = Console(stderr=True)


def _configure_logging() -> None:
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper()),
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
    )


def run_server() -> None:
    """Start the exporter HTTP server."""
    token_status = "SET" if settings.exporter_token else "NOT SET (no auth)"

    console.print(
        Panel.fit(
            f"[bold]Script Exporter[/bold]\n"
            f"Bind:    {settings.exporter_host}:{settings.exporter_port}\n"
            f"Token:   {token_status}\n"
            f"Config:  {settings.script_config}\n"
            f"Shell:   {settings.script_shell}",
            title="script-exporter",
            border_style="green",
        )
    )

    uvicorn.run(
        "script_exporter.exporter.app:exporter_app",
        host=settings.exporter_host,
        port=settings.exporter_port,
        log_level=settings.log_level.lower(),
    )


def merge_cmd(paths: list[str]) -> int:
    """Print the canonical merge of *paths*."""
    try:
        merged = merge_configs(paths)
    except ScriptExporterError as e:
        err_console.print(f"[red]{e}[/red]")
        return 1
    sys.stdout.write(merged.decode("utf-8"))
    return 0


def run_cmd(paths: list[str], name: str, pattern: str) -> int:
    """Run the selected scripts once and print their results."""
    try:
        selected = filter_scripts(load_scripts(paths), name=name, pattern=pattern)
    except ScriptExporterError as e:
        err_console.print(f"[red]{e}[/red]")
        return 1

    default_timeout = settings.script_default_timeout or None
    with console.status(f"[bold green]Running {len(selected)} scripts..."):
        measurements = run_scripts(selected, default_timeout=default_timeout, shell=settings.script_shell)

    table = Table(title="Script results")
    table.add_column("Script")
    table.add_column("Success")
    table.add_column("Duration (s)", justify="right")
    for m in measurements:
        status = "[green]yes[/green]" if m.success else "[red]no[/red]"
        if m.timed_out:
            status += " (timeout)"
        elif m.error:
            status += f" ({m.error})"
        table.add_row(m.script.name, status, f"{m.duration:.3f}")
    console.print(table)

    return 0 if all(m.success for m in measurements) else 2


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Prometheus exporter for check scripts")
    sub = parser.add_subparsers(dest="command")

    sub.add_parser("serve", help="Start the exporter HTTP server")

    merge_parser = sub.add_parser("merge", help="Print the merged config in canonical form")
    merge_parser.add_argument("paths", nargs="+", help="Config files or directories")

    run_parser = sub.add_parser("run", help="Run scripts once and print the results")
    run_parser.add_argument("--name", default="", help="Exact script name")
    run_parser.add_argument("--pattern", default="", help="Regex searched in script names")
    run_parser.add_argument(
        "--config", nargs="+", default=None,
        help="Config files or directories (default: SCRIPT_CONFIG)",
    )

    args = parser.parse_args(argv)
    _configure_logging()

    if args.command == "serve":
        run_server()
    elif args.command == "merge":
        sys.exit(merge_cmd(args.paths))
    elif args.command == "run":
        sys.exit(run_cmd(args.config or settings.script_config_paths, args.name, args.pattern))
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
