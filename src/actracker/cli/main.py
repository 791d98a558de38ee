# Copyright 2025 Animals Code Apache 2.0
#
# The Main CLI Entry Point.
# Orchestrates: Config -> Manifest -> Throttle -> Snapshot -> Submit.

import json
import time
import typer
import logging
import datetime
from pathlib import Path
from typing import Optional
from rich.console import Console
from rich.table import Table
from rich.panel import Panel

# --- Internal Modules ---
from actracker import __version__
from actracker.core.config import ConfigLoader
from actracker.core.hooks import HookTable
from actracker.core.store import SettingsStore, LAST_SEND_OPTION
from actracker.host.manifest import ManifestHost, ManifestError
from actracker.reporting.snapshot import build_snapshot
from actracker.reporting.telemetry import (
    OVERRIDE_COOLDOWN,
    get_last_send_time,
    is_send_due,
    send_tracking_data,
)

# Setup Logging
logging.basicConfig(level=logging.INFO, format="%(message)s")
logger = logging.getLogger("actracker")

# Setup Typer & Rich
app = typer.Typer(help="Animals Code Tracker: opt-in plugin usage reporting")
console = Console()

ConfigOpt = typer.Option(None, "--config", "-c", help="Path to actracker.yaml")
ManifestOpt = typer.Option(None, "--manifest", "-m", help="Path to the site manifest (YAML)")
VerboseOpt = typer.Option(False, "--verbose", "-v", help="Show detailed logs")


def _load(config_path: Optional[Path], manifest: Optional[Path], verbose: bool):
    if verbose:
        logger.setLevel(logging.DEBUG)

    config = ConfigLoader.load(config_path)
    manifest = manifest or (Path(config.manifest_path) if config.manifest_path else None)
    if not manifest:
        console.print("[bold red]Error:[/bold red] No site manifest. Use --manifest or set manifest_path.")
        raise typer.Exit(code=1)

    try:
        host = ManifestHost.from_file(manifest)
    except ManifestError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(code=1)

    store = SettingsStore(Path(config.store_path) if config.store_path else None)
    hooks = HookTable.from_mapping(config.filters)
    return config, host, store, hooks


@app.command()
def send(
    force: bool = typer.Option(False, "--force", "-f", help="Send now, ignoring the weekly interval"),
    config_path: Optional[Path] = ConfigOpt,
    manifest: Optional[Path] = ManifestOpt,
    verbose: bool = VerboseOpt,
):
    """
    Sends a usage report if the interval (or the override cooldown) allows it.
    """
    config, host, store, hooks = _load(config_path, manifest, verbose)
    # The process exits right after, so the request can't be left in the background
    config.blocking = True

    try:
        sent = send_tracking_data(force, host=host, hooks=hooks, store=store, config=config)
    finally:
        store.close()

    if sent:
        console.print(f"[green]✔ Report sent to {config.api_url}[/green]")
    else:
        console.print("[yellow]Report skipped: sent too recently.[/yellow]")


@app.command()
def snapshot(
    json_output: bool = typer.Option(False, "--json", help="Output the payload as JSON"),
    config_path: Optional[Path] = ConfigOpt,
    manifest: Optional[Path] = ManifestOpt,
    verbose: bool = VerboseOpt,
):
    """
    Shows exactly what would be reported, without sending anything.
    """
    config, host, store, hooks = _load(config_path, manifest, verbose)
    try:
        data = build_snapshot(host, hooks, config, store)
    finally:
        store.close()

    if json_output:
        console.print_json(json.dumps(data))
    else:
        _print_snapshot(data)


def _print_snapshot(data: dict):
    """Renders one table per section."""
    console.print(Panel.fit(f"[bold cyan]{data.get('url', 'unknown site')}[/bold cyan]", border_style="cyan"))

    for section, values in data.items():
        if not isinstance(values, dict):
            continue
        table = Table(title=section)
        table.add_column("Key", style="cyan")
        table.add_column("Value", style="magenta")
        for key, value in values.items():
            table.add_row(str(key), json.dumps(value) if isinstance(value, dict) else str(value))
        console.print(table)


@app.command()
def status(
    config_path: Optional[Path] = ConfigOpt,
    verbose: bool = VerboseOpt,
):
    """Shows when the last report went out and whether the next one is due."""
    if verbose:
        logger.setLevel(logging.DEBUG)
    config = ConfigLoader.load(config_path)
    store = SettingsStore(Path(config.store_path) if config.store_path else None)
    hooks = HookTable.from_mapping(config.filters)
    now = int(time.time())
    try:
        last_send = get_last_send_time(store, hooks)
        # Same hook-resolved decision that send makes
        routine_due = is_send_due(False, hooks=hooks, store=store, config=config, now=now)
        forced_due = is_send_due(True, hooks=hooks, store=store, config=config, now=now)
    finally:
        store.close()

    if not last_send:
        console.print("Last report: [dim]never[/dim]")
    else:
        sent_at = datetime.datetime.fromtimestamp(int(last_send), datetime.timezone.utc)
        console.print(f"Last report: {sent_at.isoformat()}")
    _print_due("Next scheduled report", routine_due)
    _print_due(f"Forced report (cooldown {OVERRIDE_COOLDOWN // 60} min)", forced_due)


def _print_due(label: str, due: bool):
    state = "[green]due[/green]" if due else "[yellow]waiting[/yellow]"
    console.print(f"{label}: {state}")


@app.command()
def reset(config_path: Optional[Path] = ConfigOpt):
    """Forgets the last send time, so the next trigger reports."""
    config = ConfigLoader.load(config_path)
    store = SettingsStore(Path(config.store_path) if config.store_path else None)
    try:
        removed = store.delete_option(LAST_SEND_OPTION)
    finally:
        store.close()
    console.print("Last send time cleared." if removed else "Nothing to clear.")


@app.command()
def version():
    """Show version info."""
    console.print(f"Animals Code Tracker v{__version__}")


if __name__ == "__main__":
    app()
