"""
Main CLI application using Typer.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import List, Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.progress import BarColumn, Progress, TaskProgressColumn, TextColumn
from rich.table import Table

from hostscope.cli.formatters import (
    format_diff,
    format_plan,
    format_report,
    print_header,
    print_system_info,
)
from hostscope.core.collector import Collector
from hostscope.core.config import AppConfig
from hostscope.core.detector import CapabilityProbe
from hostscope.core.elevation import build_policy
from hostscope.core.executor import Executor
from hostscope.core.report import Report
from hostscope.report.diff import diff_reports
from hostscope.report.html_report import generate_html, generate_html_report
from hostscope.report.text_report import render_text
from hostscope.sources.base import ProbeContext
from hostscope.sources.plan import DEFAULT_PLAN, section_keys, select_sections
from hostscope.storage.logger import setup_logging
from hostscope.storage.snapshot import list_snapshots, load_snapshot, save_snapshot

app = typer.Typer(
    name="hostscope",
    help="Read-only host inventory collector",
    add_completion=False,
)

console = Console()
err_console = Console(stderr=True)

FORMATS = ("rich", "text", "json", "html")
ELEVATE_MODES = ("auto", "never")


def _check_choice(value: Optional[str], choices: tuple, name: str) -> Optional[str]:
    if value is not None and value not in choices:
        raise typer.BadParameter(f"{name} must be one of: {', '.join(choices)}")
    return value


def _format_option(value: Optional[str]) -> Optional[str]:
    return _check_choice(value, FORMATS, "format")


def _elevate_option(value: Optional[str]) -> Optional[str]:
    return _check_choice(value, ELEVATE_MODES, "elevate")


def _load_config(**overrides) -> AppConfig:
    """Environment < config file < CLI flags; invalid values exit with code 1."""
    try:
        return AppConfig.load(**overrides)
    except ValidationError as e:
        err_console.print(f"[bold red]Invalid configuration:[/bold red]\n{e}")
        raise typer.Exit(1)


def emit_report(report: Report, fmt: str) -> None:
    """Write a report to stdout in the requested format."""
    if fmt == "json":
        typer.echo(report.model_dump_json(indent=2))
    elif fmt == "text":
        typer.echo(render_text(report), nl=False)
    elif fmt == "html":
        typer.echo(generate_html(report), nl=False)
    else:
        format_report(report, console)


def _run_collect(
    fmt: Optional[str] = None,
    output_dir: Optional[Path] = None,
    save: bool = False,
    elevate: Optional[str] = None,
    timeout: Optional[float] = None,
    deadline: Optional[float] = None,
    workers: Optional[int] = None,
    only: Optional[List[str]] = None,
    skip: Optional[List[str]] = None,
    verbose: bool = False,
) -> Report:
    config = _load_config(
        format=fmt,
        output_dir=output_dir,
        elevate=elevate,
        timeout=timeout,
        deadline=deadline,
        workers=workers,
        verbose=True if verbose else None,
    )

    try:
        plan = select_sections(only=only, skip=skip)
    except ValueError as e:
        err_console.print(f"[red]{e}[/red]")
        err_console.print(f"[dim]Valid sections: {', '.join(section_keys())}[/dim]")
        raise typer.Exit(1)

    run_dir = config.create_run_dir() if save else None
    logger = setup_logging(run_dir, config.verbose)
    logger.info(f"Configuration: {config.model_dump(mode='json')}")

    executor = Executor(build_policy(config.elevate), logger)
    collector = Collector(
        executor=executor,
        timeout=config.timeout,
        deadline=config.deadline,
        workers=config.workers,
    )

    if config.format == "rich":
        print_header(console)
        with Progress(
            TextColumn("[bold cyan]{task.description}[/bold cyan]"),
            BarColumn(bar_width=24),
            TaskProgressColumn(),
            console=console,
            transient=True,
        ) as progress:
            task = progress.add_task("Collecting sections…", total=len(plan))

            def _cb(completed: int, _total: int) -> None:
                progress.update(task, completed=completed)

            report = collector.run(plan, progress_callback=_cb)
        print_system_info(report.host, console, elevated=report.elevated)
    else:
        report = collector.run(plan)

    emit_report(report, config.format)

    if run_dir is not None:
        save_snapshot(report, config, run_dir)
        generate_html_report(report, run_dir / "report.html")
        err_console.print(f"\n[bold green]✓ Snapshot saved to:[/bold green] {run_dir}")
        err_console.print(f"[dim]Hint: hostscope show \"{run_dir}\"[/dim]")

    return report


@app.callback(invoke_without_command=True)
def _default(
    ctx: typer.Context,
    output_dir: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Output directory for saved snapshots",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose output",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        help="Show version and exit",
    ),
):
    """
    HostScope - read-only host inventory collector.
    Run with no command to collect a full report, or use a subcommand.
    """
    if version:
        from hostscope import __version__
        console.print(f"hostscope {__version__}")
        raise typer.Exit(0)
    if ctx.invoked_subcommand is None:
        _run_collect(output_dir=output_dir, verbose=verbose)


@app.command()
def collect(
    fmt: Optional[str] = typer.Option(
        None,
        "--format",
        "-f",
        callback=_format_option,
        help="Output format: rich, text, json, html",
    ),
    output_dir: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Output directory for saved snapshots",
    ),
    save: bool = typer.Option(
        False,
        "--save",
        "-s",
        help="Save the snapshot (json, txt, csv, html, logs) under the output directory",
    ),
    elevate: Optional[str] = typer.Option(
        None,
        "--elevate",
        callback=_elevate_option,
        help="auto: use passwordless sudo when it works; never: run everything unprivileged",
    ),
    timeout: Optional[float] = typer.Option(
        None,
        "--timeout",
        "-t",
        help="Per-command timeout in seconds",
    ),
    deadline: Optional[float] = typer.Option(
        None,
        "--deadline",
        help="Deadline for the whole run in seconds",
    ),
    workers: Optional[int] = typer.Option(
        None,
        "--workers",
        "-w",
        help="Number of sections collected concurrently",
    ),
    only: Optional[List[str]] = typer.Option(
        None,
        "--only",
        help="Collect only these sections (repeatable, e.g. --only network)",
    ),
    skip: Optional[List[str]] = typer.Option(
        None,
        "--skip",
        help="Skip these sections (repeatable)",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose output",
    ),
):
    """
    Collect a host snapshot and print it.
    """
    _run_collect(
        fmt=fmt,
        output_dir=output_dir,
        save=save,
        elevate=elevate,
        timeout=timeout,
        deadline=deadline,
        workers=workers,
        only=only,
        skip=skip,
        verbose=verbose,
    )


@app.command()
def sections(
    elevate: Optional[str] = typer.Option(
        None,
        "--elevate",
        callback=_elevate_option,
        help="Elevation mode used to judge mandatory-elevation sources",
    ),
):
    """
    List the collection plan and which sources can run on this host.
    """
    config = _load_config(elevate=elevate)
    setup_logging(None, config.verbose)
    ctx = ProbeContext(probe=CapabilityProbe(), executor=Executor(build_policy(config.elevate)))
    format_plan(DEFAULT_PLAN, ctx, console)
    console.print("\n[dim]Green candidates can run here; the first one that succeeds is used.[/dim]")


@app.command()
def history(
    output_dir: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Output directory where snapshots are stored (default: output)",
    ),
    limit: int = typer.Option(
        10,
        "--limit",
        "-n",
        help="Maximum number of snapshots to show",
    ),
):
    """
    Show the last N saved snapshots.
    """
    out = output_dir if output_dir is not None else _load_config().output_dir
    run_dirs = list_snapshots(out, limit=limit)
    if not run_dirs:
        console.print(f"[dim]No snapshots found in {out}.[/dim]")
        return

    table = Table(title="Recent snapshots", show_header=True)
    table.add_column("Time", style="cyan")
    table.add_column("Host", style="white")
    table.add_column("Sections", justify="right")
    table.add_column("Unavailable", justify="right")
    table.add_column("Directory", style="dim")

    for run_dir in run_dirs:
        meta_file = run_dir / "metadata.json"
        time_str = run_dir.name[:17].replace("_", " ")
        host = sections_count = unavailable = "—"
        if meta_file.exists():
            try:
                meta = json.loads(meta_file.read_text(encoding="utf-8"))
            except (OSError, ValueError):
                meta = {}
            host = str(meta.get("hostname", "—"))
            sections_count = str(meta.get("sections", "—"))
            unavailable = str(meta.get("unavailable", "—"))
            if meta.get("truncated"):
                unavailable += " (truncated)"
        table.add_row(time_str, host, sections_count, unavailable, run_dir.name)

    console.print()
    console.print(table)


def _load_or_exit(path: Path) -> Report:
    try:
        return load_snapshot(path)
    except (FileNotFoundError, ValidationError, ValueError) as e:
        err_console.print(f"[red]Cannot load snapshot {path}: {e}[/red]")
        raise typer.Exit(1)


@app.command()
def show(
    run_dir: Path = typer.Argument(
        ...,
        help="Snapshot directory or report.json file",
    ),
    fmt: str = typer.Option(
        "rich",
        "--format",
        "-f",
        callback=_format_option,
        help="Output format: rich, text, json, html",
    ),
):
    """
    Re-render a saved snapshot.
    """
    report = _load_or_exit(run_dir)
    if fmt == "rich":
        print_system_info(report.host, console, elevated=report.elevated)
    emit_report(report, fmt)


@app.command()
def diff(
    old: Path = typer.Argument(..., help="Older snapshot directory or report.json"),
    new: Path = typer.Argument(..., help="Newer snapshot directory or report.json"),
    context: int = typer.Option(2, "--context", "-c", help="Lines of context in text diffs"),
):
    """
    Compare two saved snapshots entry by entry (timestamps are ignored).
    """
    changes = diff_reports(_load_or_exit(old), _load_or_exit(new), context=context)
    format_diff(changes, console)
