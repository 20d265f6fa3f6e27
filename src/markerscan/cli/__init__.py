"""
CLI for markerscan.

Provides command-line access to the marker scanner.
"""

import json
import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from markerscan.core.config import LoggingConfig, MarkerScanConfig, load_config
from markerscan.core.scanner import (
    InvalidGlobPatternError,
    MarkerScanner,
    ScanConfig,
    get_default_registry,
)

# Initialize Rich Consoles
console = Console()
err_console = Console(stderr=True)

app = typer.Typer(
    name="markerscan",
    help="Find TODO, FIXME and other marker comments in a source tree",
    add_completion=False,
)

OUTPUT_FORMATS = ("table", "json")


def _configure_logging(logging_config: LoggingConfig, verbose: bool) -> None:
    """Route log records to stderr through Rich."""
    level = "DEBUG" if verbose else logging_config.level.upper()
    logging.basicConfig(
        level=level,
        format=logging_config.format,
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def _build_scan_config(
    cfg: MarkerScanConfig,
    include: Optional[list[str]],
    exclude: Optional[list[str]],
    marker_types: Optional[list[str]],
) -> ScanConfig:
    """Merge command-line overrides into the configured scan settings."""
    if include:
        cfg.scan.include_patterns = list(include)
    if exclude:
        cfg.scan.exclude_patterns = list(exclude)
    if marker_types:
        cfg.scan.marker_types = list(marker_types)
    return cfg.to_scan_config()


@app.command()
def scan(
    path: Path = typer.Argument(Path("."), help="Directory to scan"),
    include: Optional[list[str]] = typer.Option(
        None, "--include", "-i", help="Only scan files matching this glob. Can be repeated."
    ),
    exclude: Optional[list[str]] = typer.Option(
        None, "--exclude", "-e", help="Skip entries named or matching this glob. Can be repeated."
    ),
    marker_types: Optional[list[str]] = typer.Option(
        None, "--type", "-t", help="Marker keyword to look for (e.g. TODO). Can be repeated."
    ),
    config_path: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Configuration file (.yaml, .yml or .json)"
    ),
    output_format: str = typer.Option("table", "--format", "-f", help="Output format: table or json"),
    workers: Optional[int] = typer.Option(
        None, "--workers", "-w", help="Number of files scanned in parallel"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log skipped files and other details"),
):
    """Scan a directory for marker comments."""
    if output_format not in OUTPUT_FORMATS:
        err_console.print(
            f"[bold red]Error:[/bold red] Unknown format '{output_format}'. "
            f"Choose from: {', '.join(OUTPUT_FORMATS)}"
        )
        raise typer.Exit(1)

    if not path.is_dir():
        err_console.print(f"[bold red]Error:[/bold red] Not a directory: {path}")
        raise typer.Exit(1)

    try:
        cfg = load_config(config_path)
        _configure_logging(cfg.logging, verbose)
        scan_config = _build_scan_config(cfg, include, exclude, marker_types)
        scanner = MarkerScanner(
            config=scan_config,
            max_workers=workers if workers is not None else cfg.scan.max_workers,
            max_file_size=cfg.scan.max_file_size_bytes,
        )
    except (InvalidGlobPatternError, ValueError, FileNotFoundError) as e:
        err_console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)

    result = scanner.scan(path)

    if output_format == "json":
        typer.echo(json.dumps([marker.to_dict() for marker in result.markers], indent=2))
        return

    if result.markers:
        table = Table(show_header=True, header_style="bold")
        table.add_column("File", style="cyan", overflow="fold")
        table.add_column("Line", justify="right")
        table.add_column("Col", justify="right")
        table.add_column("Type", style="magenta")
        table.add_column("Content")
        for marker in result.markers:
            marker_type = marker.marker_type if marker.tag is None else f"{marker.marker_type}({marker.tag})"
            table.add_row(
                escape(marker.relative_path),
                str(marker.line_number),
                str(marker.column),
                escape(marker_type),
                escape(marker.content),
            )
        console.print(table)
    else:
        console.print("[yellow]No markers found.[/yellow]")

    # Summary Panel
    summary = Table.grid(padding=1)
    summary.add_column(style="bold")
    summary.add_column()
    summary.add_row("Files Scanned:", str(result.files_scanned))
    if result.files_skipped:
        summary.add_row("Files Skipped:", f"[yellow]{result.files_skipped}[/yellow]")
    summary.add_row("Markers:", str(len(result.markers)))
    for marker_type, count in sorted(result.counts_by_type().items()):
        summary.add_row(f"  {marker_type}:", str(count))
    summary.add_row("Duration:", f"{result.duration_seconds:.2f}s")

    console.print(
        Panel(
            summary,
            title="[bold green]Scan Complete[/bold green]",
            border_style="green",
            expand=False,
        )
    )


@app.command()
def languages():
    """List the recognised languages in lookup order."""
    table = Table(show_header=True, header_style="bold")
    table.add_column("Language", style="cyan")
    table.add_column("Extensions")
    table.add_column("Line Comments")
    table.add_column("Block Comments")

    for grammar in get_default_registry().grammars:
        table.add_row(
            grammar.name,
            " ".join(sorted(grammar.extensions)),
            " ".join(grammar.single_line_prefixes) or "-",
            " ".join(f"{start} {end}" for start, end in grammar.multi_line_delimiters) or "-",
        )

    console.print(table)


if __name__ == "__main__":
    app()
