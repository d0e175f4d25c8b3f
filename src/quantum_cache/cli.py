"""Click CLI for quantum-cache — inspect and manage the local remote cache."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from quantum_cache.cache.keys import parse_path_key
from quantum_cache.cache.manager import CacheManager
from quantum_cache.config.hierarchy import load_settings
from quantum_cache.errors.exceptions import ConfigError, QuantumCacheError
from quantum_cache.utils.formatting import (
    bytes_to_size,
    format_timestamp,
    size_color,
    size_thresholds,
)

console = Console()
error_console = Console(stderr=True)


def _setup_logging(verbosity: int, default_level: int = logging.WARNING) -> None:
    """Configure logging based on verbosity level."""
    level = default_level
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG

    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=error_console, show_time=False, show_path=False)],
    )


@click.group()
@click.version_option(package_name="quantum-cache")
@click.option(
    "--cache-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Base folder for the cache; a quantum-cli folder is used inside it.",
)
@click.option("-v", "--verbose", count=True, help="Increase verbosity (-v info, -vv debug).")
@click.pass_context
def cli(ctx: click.Context, cache_dir: Path | None, verbose: int) -> None:
    """quantum-cache — local cache for remote component files."""
    try:
        settings = load_settings(cache_dir=cache_dir)
    except ConfigError as e:
        error_console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)

    _setup_logging(verbose, settings.log_level_number)
    ctx.obj = settings


def _manager(ctx: click.Context) -> CacheManager:
    return CacheManager.from_settings(ctx.obj)


@cli.group(invoke_without_command=True)
@click.pass_context
def cache(ctx: click.Context) -> None:
    """Manage the local remote cache."""
    if ctx.invoked_subcommand is None:
        ctx.invoke(cache_info)


@cache.command("info")
@click.pass_context
def cache_info(ctx: click.Context) -> None:
    """Get information about the local remote cache."""
    mgr = _manager(ctx)

    try:
        total = mgr.total_size_bytes()
        tree = mgr.tree()
    except (QuantumCacheError, OSError) as e:
        error_console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)

    console.print(f"Full cache size: [bright_cyan]{bytes_to_size(total)}[/bright_cyan]")

    low, mid = size_thresholds(summary.size for summary in tree.values())

    for remote, summary in sorted(tree.items(), key=lambda item: item[1].size, reverse=True):
        if summary.size == 0:
            continue

        color = size_color(summary.size, low, mid)
        size = bytes_to_size(summary.size)
        table = Table(
            title=f"[{color}]{escape(remote)}[/{color}] [bright_black]({size})[/bright_black]",
            title_justify="left",
            show_header=True,
        )
        table.add_column("Path", style="cyan")
        table.add_column("Size", style="bright_cyan")
        table.add_column("Cached", style="bright_black")

        for key, file in summary.files.items():
            try:
                label = escape("/".join(parse_path_key(key)))
            except ValueError:
                label = f"[red]✖[/red] {escape(key)}"
            table.add_row(label, bytes_to_size(file.size), format_timestamp(file.cached_at))

        console.print()
        console.print(table)


@cache.command("clear")
@click.confirmation_option(prompt="Are you sure you want to clear the local remote cache?")
@click.pass_context
def cache_clear(ctx: click.Context) -> None:
    """Clear the local remote cache."""
    mgr = _manager(ctx)
    try:
        mgr.clear()
    except (QuantumCacheError, OSError) as e:
        error_console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)
    console.print("[green]Cleared the local remote cache.[/green]")


def main() -> None:
    """Entry point for the CLI."""
    cli()
