"""
Rich formatting utilities for CLI output.
"""

from typing import List, Sequence

from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from hostscope.core.detector import SystemInfo
from hostscope.core.report import Report, SectionResult, SourceEntry
from hostscope.report.diff import EntryChange
from hostscope.sources.base import CommandCandidate, ElevationMode, ProbeContext, Section


def print_header(console: Console) -> None:
    """Print application header."""
    from hostscope import __version__

    header_text = f"""
    ╔═══════════════════════════════════════════════════════╗
    ║                                                       ║
    ║        HostScope - Host Inventory Snapshot            ║
    ║                    Version {__version__:<27}║
    ║                                                       ║
    ╚═══════════════════════════════════════════════════════╝
    """

    console.print(header_text, style="bold cyan", markup=False)


def print_system_info(system_info: SystemInfo, console: Console, elevated: bool = False) -> None:
    """Print detected system information."""
    table = Table(title="System Information", show_header=False, box=None)
    table.add_column("Property", style="cyan")
    table.add_column("Value", style="white")

    table.add_row("Operating System", system_info.os_type)
    table.add_row("Platform", system_info.platform)
    table.add_row("Python Version", system_info.python_version)
    table.add_row("Hostname", system_info.hostname)
    table.add_row("Elevated", "yes" if elevated else "no")

    console.print()
    console.print(table)
    console.print()


def _status_icon_and_color(entry: SourceEntry) -> tuple[str, str]:
    """Map an entry to icon and color."""
    if entry.status == "unavailable":
        return "✗", "red"
    if entry.note:
        return "⚠", "yellow"
    if entry.status == "empty":
        return "○", "blue"
    return "✓", "green"


def _entry_renderables(entry: SourceEntry) -> list:
    icon, color = _status_icon_and_color(entry)
    heading = Text()
    heading.append(f"{icon} ", style=color)
    heading.append(entry.label, style="bold")
    if entry.source:
        heading.append(f"  [{entry.source}]", style="dim")
    if entry.note:
        heading.append(f"  {entry.note}", style=color)

    if entry.status == "ok":
        return [heading, Text(entry.text)]
    value = "(none)" if entry.status == "empty" else entry.text
    heading.append(f"  {value}", style=color)
    return [heading]


def _section_color(section: SectionResult) -> str:
    available = section.available_count
    if available == len(section.entries):
        return "green"
    return "yellow" if available else "red"


def format_report(report: Report, console: Console) -> None:
    """Display every section of a report as a panel."""
    for section in report.sections:
        renderables = []
        for entry in section.entries:
            renderables.extend(_entry_renderables(entry))
        console.print(
            Panel(
                Group(*renderables),
                title=Text(section.title, style="bold"),
                title_align="left",
                border_style=_section_color(section),
            )
        )
    format_summary(report, console)


def format_summary(report: Report, console: Console) -> None:
    """Per-section availability table."""
    table = Table(title="Summary", show_header=True, box=None, padding=(0, 2))
    table.add_column("Section", style="cyan")
    table.add_column("Available", justify="right")
    table.add_column("Unavailable", justify="right")

    for section in report.sections:
        missing = len(section.entries) - section.available_count
        table.add_row(
            Text(section.title),
            str(section.available_count),
            Text(str(missing), style="red" if missing else "dim"),
        )

    console.print()
    console.print(table)
    duration = (report.generated_at_end - report.generated_at_start).total_seconds()
    console.print(
        f"[dim]Started {report.generated_at_start.isoformat(timespec='seconds')}, "
        f"completed in {duration:.1f}s[/dim]"
    )
    if report.truncated:
        console.print("[bold yellow]⚠ Run deadline exceeded: report is partial[/bold yellow]")


def format_plan(plan: Sequence[Section], ctx: ProbeContext, console: Console) -> None:
    """Show each section's candidates and whether they can run on this host."""
    table = Table(title="Collection Plan", show_header=True, box=None, padding=(0, 2))
    table.add_column("Key", style="cyan")
    table.add_column("Source", style="white")
    table.add_column("Candidates")

    for section in plan:
        for i, source in enumerate(section.sources):
            candidates = Text()
            for j, candidate in enumerate(source.candidates):
                if j:
                    candidates.append(" → ", style="dim")
                label = candidate.describe()
                if isinstance(candidate, CommandCandidate) and candidate.elevation is not ElevationMode.NONE:
                    label += f" ({candidate.elevation.value} elevation)"
                usable = candidate.missing(ctx) is None
                candidates.append(label, style="green" if usable else "red")
            table.add_row(section.key if i == 0 else "", source.label, candidates)

    console.print()
    console.print(table)


def format_diff(changes: List[EntryChange], console: Console) -> None:
    """Display report differences."""
    if not changes:
        console.print("[bold green]✓ No differences[/bold green]")
        return

    styles = {"added": "green", "removed": "red", "changed": "yellow"}
    for change in changes:
        title = Text(f"{change.kind.upper()}: {change.section} / {change.label}", style=styles[change.kind])
        console.print(title)
        for line in change.diff:
            style = "green" if line.startswith("+") else "red" if line.startswith("-") else "dim"
            console.print(Text(line, style=style))
    console.print(f"\n[dim]{len(changes)} entr{'y' if len(changes) == 1 else 'ies'} differ[/dim]")
