"""Rich terminal reporter — colour, severity pills, findings table."""

from __future__ import annotations

from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from tailguard.findings.models import ScanResult

_SEVERITY_STYLE = {
    "error": "bold white on red",
    "warning": "bold black on yellow",
}


def _severity_pill(severity: str) -> Text:
    return Text(f" {severity.upper()} ", style=_SEVERITY_STYLE.get(severity, ""))


def render(
    result: ScanResult,
    *,
    show_summary: bool = True,
    console: Optional[Console] = None,
) -> None:
    """Print scan results to the terminal using Rich."""
    console = console or Console(stderr=True)

    if not result.findings:
        console.print()
        console.print("[bold green]No convention violations found.[/bold green]")
        if show_summary:
            _print_summary(console, result)
        return

    console.print()
    table = Table(
        title="tailguard findings",
        show_lines=True,
        title_style="bold",
        border_style="dim",
    )
    table.add_column("Severity", justify="center", width=11)
    table.add_column("Location", style="magenta")
    table.add_column("Rule", style="cyan", min_width=20)
    table.add_column("Message")

    for finding in result.findings:
        table.add_row(
            _severity_pill(finding.severity),
            escape(f"{finding.path}:{finding.line}:{finding.col}"),
            finding.rule_id,
            escape(finding.message),
        )

    console.print(table)

    if show_summary:
        _print_summary(console, result)

    console.print()
    if result.blocked:
        console.print("[bold red]FAILED: blocking findings at or above the fail threshold.[/bold red]")
    else:
        console.print("[bold yellow]Findings below the fail threshold; passing.[/bold yellow]")


def _print_summary(console: Console, result: ScanResult) -> None:
    console.print()
    console.print(f"[dim]Files scanned:[/dim]  {result.scanned_files}")
    console.print(f"[dim]Findings:[/dim]       {result.total_findings}")
    console.print(f"[dim]Blocking:[/dim]       {len(result.blocking_findings)}")
    console.print(f"[dim]Suppressed:[/dim]     {len(result.suppressed)}")
    console.print(f"[dim]Skipped:[/dim]        {len(result.skipped_files)}")
    console.print(f"[dim]Duration:[/dim]       {result.scan_duration_ms:.0f}ms")
