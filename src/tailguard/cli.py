"""tailguard CLI — Typer application with scan, rules, init, and audit commands."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from tailguard import __version__

app = typer.Typer(
    name="tailguard",
    help="Lint Tailwind v4 / Next.js source against styling and boundary conventions.",
    add_completion=False,
    no_args_is_help=True,
)

console = Console(stderr=True)


def _load(config: Optional[str]):
    """Load config and build the rule engine, exit 2 on failure."""
    from tailguard.config.loader import ConfigError, load_config
    from tailguard.rules.models import DuplicateRuleError, InvalidRuleError
    from tailguard.rules.registry import build_engine

    root = Path.cwd()
    try:
        cfg = load_config(root, config)
    except ConfigError as exc:
        console.print(f"[bold red]Config error:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc

    try:
        engine = build_engine(cfg, root)
    except (InvalidRuleError, DuplicateRuleError) as exc:
        console.print(f"[bold red]Rule catalog error:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc
    return cfg, engine


# ── scan ──────────────────────────────────────────────────────────────────────


@app.command()
def scan(
    paths: Optional[List[Path]] = typer.Argument(None, help="Files or directories to scan (default: .)"),
    stdin: bool = typer.Option(False, "--stdin", help="Read source text from stdin"),
    stdin_path: str = typer.Option("<stdin>", "--stdin-path", help="Path to report for stdin input"),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to .tailguard.toml"),
    format: Optional[str] = typer.Option(None, "--format", "-f", help="Output format: text | terminal | json | sarif"),
    output: Optional[str] = typer.Option(None, "--output", "-o", help="Write report to file"),
    fail_on: Optional[str] = typer.Option(None, "--fail-on", help="Severity threshold: warning | error"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
    debug: bool = typer.Option(False, "--debug", help="Debug output with timing"),
) -> None:
    """Scan source files (or stdin) for convention violations."""
    from tailguard.config.schema import OUTPUT_FORMATS, SEVERITY_ORDER
    from tailguard.log import setup_logging
    from tailguard.output import json_report, sarif, terminal, text
    from tailguard.scanner.engine import ScanError
    from tailguard.scanner.runner import scan_paths, scan_text

    setup_logging("DEBUG" if debug else "INFO" if verbose else "WARNING")

    cfg, engine = _load(config)

    # --- CLI overrides ---
    if format:
        if format not in OUTPUT_FORMATS:
            console.print(f"[bold red]Invalid format:[/bold red] {format}")
            raise typer.Exit(code=2)
        cfg.output.format = format  # type: ignore[assignment]
    if fail_on:
        if fail_on not in SEVERITY_ORDER:
            console.print(f"[bold red]Invalid fail-on level:[/bold red] {fail_on}")
            raise typer.Exit(code=2)
        cfg.scan.fail_on = fail_on  # type: ignore[assignment]

    if verbose or debug:
        console.print(f"[dim]Rules loaded: {len(engine)}[/dim]")

    # --- Run scan ---
    try:
        if stdin:
            try:
                source = sys.stdin.buffer.read().decode("utf-8")
            except UnicodeDecodeError as exc:
                raise ScanError("stdin is not valid UTF-8") from exc
            result = scan_text(source, engine, cfg, path=stdin_path)
        else:
            result = scan_paths(paths or [Path(".")], engine, cfg)
    except ScanError as exc:
        console.print(f"[bold red]Error:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc

    if debug:
        console.print(f"[dim]Scan duration: {result.scan_duration_ms:.0f}ms[/dim]")

    # --- Output ---
    fmt = cfg.output.format
    if fmt == "terminal":
        terminal.render(result, show_summary=cfg.output.show_summary)
        report_text = json_report.render(result)
    elif fmt == "json":
        report_text = json_report.render(result)
    elif fmt == "sarif":
        report_text = sarif.render(result, engine.rules)
    else:
        report_text = text.render(result, show_summary=cfg.output.show_summary)

    if output:
        Path(output).write_text(report_text + "\n", encoding="utf-8")
        if verbose:
            console.print(f"[dim]Report written to {output}[/dim]")
    elif fmt != "terminal" and report_text:
        print(report_text)

    # --- Exit code ---
    raise typer.Exit(code=1 if result.blocked else 0)


# ── rules ─────────────────────────────────────────────────────────────────────


@app.command()
def rules(
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to .tailguard.toml"),
) -> None:
    """List the active rule catalog."""
    _, engine = _load(config)

    table = Table(title="tailguard rules", title_style="bold", border_style="dim")
    table.add_column("Rule", style="cyan")
    table.add_column("Severity")
    table.add_column("Description")
    for rule in engine.rules:
        table.add_row(rule.id, rule.severity, escape(rule.description))
    Console().print(table)


# ── init ──────────────────────────────────────────────────────────────────────


@app.command()
def init() -> None:
    """Generate a starter .tailguard.toml in the current directory."""
    from tailguard.config.defaults import DEFAULT_TOML
    from tailguard.config.loader import CONFIG_FILENAME

    config_path = Path.cwd() / CONFIG_FILENAME

    if config_path.exists():
        console.print(f"[yellow]![/yellow] {CONFIG_FILENAME} already exists at {config_path}")
        raise typer.Exit(code=1)

    config_path.write_text(DEFAULT_TOML, encoding="utf-8")
    console.print(f"[green]✓[/green] Created {config_path}")


# ── audit ─────────────────────────────────────────────────────────────────────


@app.command()
def audit(
    paths: Optional[List[Path]] = typer.Argument(None, help="Files or directories to audit (default: .)"),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to .tailguard.toml"),
) -> None:
    """List every tailguard-ignore comment (suppression audit trail)."""
    from tailguard.config.loader import ConfigError, load_config
    from tailguard.scanner.engine import ScanError
    from tailguard.scanner.runner import ignore_globs, is_ignored, iter_source_files
    from tailguard.scanner.suppression import find_suppression_comments

    try:
        cfg = load_config(Path.cwd(), config)
    except ConfigError as exc:
        console.print(f"[bold red]Config error:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc

    ignored = ignore_globs(cfg)
    found = []
    try:
        for file in iter_source_files(paths or [Path(".")], cfg):
            if is_ignored(file.as_posix(), ignored):
                continue
            try:
                content = file.read_text(encoding="utf-8")
            except UnicodeDecodeError:
                continue
            for line_no, scope in find_suppression_comments(content):
                found.append((file.as_posix(), line_no, scope))
    except ScanError as exc:
        console.print(f"[bold red]Error:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc

    out = Console()
    if not found:
        out.print("[green]No tailguard-ignore comments found.[/green]")
        raise typer.Exit(code=0)

    out.print(f"[bold]Found {len(found)} suppression comment(s):[/bold]")
    out.print()
    for file, line_no, scope in found:
        out.print(f"  [cyan]{escape(file)}[/cyan]:[green]{line_no}[/green]  scope=[yellow]{scope}[/yellow]")


# ── version ───────────────────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        print(f"tailguard {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False, "--version", "-V", callback=_version_callback,
        is_eager=True, help="Show version and exit",
    ),
) -> None:
    """tailguard: Tailwind v4 / Next.js convention linter."""
