"""CLI entry point for pubresolve."""

from __future__ import annotations

import json
import os
from enum import Enum
from pathlib import Path
from typing import Annotated

import typer
import yaml
from rich import print as rprint
from rich.markup import escape
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table

from pubresolve.config import DEFAULT_CONFIG_TEMPLATE, PubResolveConfig, load_config
from pubresolve.errors import PublishResolutionError
from pubresolve.log import configure_logging
from pubresolve.records import PublishEntry, RecordStore
from pubresolve.resolve import PublishPlan, plan_publish
from pubresolve.services import SERVICES, get_service, is_known_service

app = typer.Typer(
    name="pubresolve",
    help="Resolve where a publish goes and which credentials it uses.",
)

record_app = typer.Typer(help="Inspect and edit the publish record file.")
app.add_typer(record_app, name="record")

config_app = typer.Typer(help="Manage pubresolve configuration.")
app.add_typer(config_app, name="config")

class OutputFormat(str, Enum):
    """Output formats for `resolve`."""

    table = "table"
    json = "json"


# Global state
_config: PubResolveConfig | None = None


def _get_config() -> PubResolveConfig:
    if _config is None:
        return load_config()
    return _config


@app.callback()
def main(
    config: Annotated[
        str | None, typer.Option("--config", "-c", help="Path to pubresolve.yaml")
    ] = None,
) -> None:
    """Global options."""
    global _config
    try:
        _config = load_config(config)
    except ValueError as e:
        rprint(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)
    configure_logging(_config.log_level, _config.log_format)


def _store_for(path: str, cfg: PubResolveConfig) -> RecordStore:
    target = Path(path)
    if not target.exists():
        rprint(f"[red]Error:[/red] Path not found: {path}")
        raise typer.Exit(1)
    return RecordStore.for_target(target, record_file=cfg.record_file)


def _fail(e: PublishResolutionError) -> typer.Exit:
    rprint(f"[red]Error:[/red] {escape(str(e))}")
    return typer.Exit(1)


def _display_plan(plan: PublishPlan) -> None:
    t = plan.target
    spec = get_service(t.service)
    panel_text = (
        f"[bold]{spec.display_name}[/bold] ({t.service})\n\n"
        f"[dim]Id:[/dim]          {t.id}\n"
        f"[dim]URL:[/dim]         {t.url or '-'}\n"
        f"[dim]Server:[/dim]      {t.server or '-'}\n"
        f"[dim]Source:[/dim]      {t.source}\n"
        f"[dim]From record:[/dim] {'yes' if t.from_record else 'no'}\n"
        f"[dim]Credentials:[/dim] {', '.join(plan.credentials.variables)}\n"
        f"[dim]Render:[/dim]      {'yes' if plan.render else 'no'}"
    )
    rprint(Panel(panel_text, title="Publish Target", border_style="green"))


@app.command()
def resolve(
    service: str | None = typer.Argument(None, help="Publish service (netlify, quarto-pub, connect)"),
    path: str = typer.Argument(".", help="Project directory or document to publish"),
    target_id: Annotated[
        str | None, typer.Option("--id", help="Identifier of an existing target")
    ] = None,
    server: Annotated[
        str | None, typer.Option("--server", help="Server URL of the target (Connect)")
    ] = None,
    no_render: Annotated[
        bool, typer.Option("--no-render", help="Publish existing output without rendering")
    ] = False,
    format: Annotated[
        OutputFormat, typer.Option("--format", "-f", help="Output format")
    ] = OutputFormat.table,
) -> None:
    """Resolve the publish target and credentials for PATH."""
    cfg = _get_config()
    # `pubresolve resolve docs/` means a path, not a service named "docs/"
    if service and path == "." and not is_known_service(service) and Path(service).exists():
        service, path = None, service
    store = _store_for(path, cfg)

    try:
        records = store.load()
        plan = plan_publish(
            records,
            service=service,
            target_id=target_id,
            server=server,
            render=cfg.render and not no_render,
            source=store.source,
        )
    except PublishResolutionError as e:
        raise _fail(e)

    if format is OutputFormat.json:
        # SecretStr values dump masked; only variable names are meaningful here.
        payload = plan.model_dump(mode="json")
        payload["credentials"] = {
            "service": plan.credentials.service,
            "variables": plan.credentials.variables,
        }
        typer.echo(json.dumps(payload, indent=2))
    else:
        _display_plan(plan)


@app.command()
def env(
    service: str | None = typer.Argument(None, help="Only show this service"),
) -> None:
    """Show the environment variables each service reads, and whether they are set."""
    try:
        specs = [get_service(service)] if service else list(SERVICES.values())
    except PublishResolutionError as e:
        raise _fail(e)

    table = Table(title="Credential Variables")
    table.add_column("Service", style="cyan")
    table.add_column("Variable", style="green")
    table.add_column("Status", justify="center")
    for spec in specs:
        for name in spec.env_vars:
            is_set = bool(os.environ.get(name, "").strip())
            status = "[green]set[/green]" if is_set else "[red]missing[/red]"
            table.add_row(spec.display_name, name, status)
    rprint(table)


# ---------------------------------------------------------------------------
# Record file commands
# ---------------------------------------------------------------------------


@record_app.command("list")
def record_list(
    path: str = typer.Argument(".", help="Project directory or document"),
) -> None:
    """List recorded publish targets for PATH."""
    cfg = _get_config()
    store = _store_for(path, cfg)
    try:
        records = store.load()
    except PublishResolutionError as e:
        raise _fail(e)

    rows = [(r, e) for r in records for e in r.entries]
    if not rows:
        rprint(f"[yellow]No publish records for {store.source} in {store.path}.[/yellow]")
        raise typer.Exit(0)

    table = Table(title=f"Publish Records ({len(rows)})")
    table.add_column("Source", style="dim")
    table.add_column("Service", style="cyan")
    table.add_column("Id", style="green")
    table.add_column("URL / Server")
    for record, entry in rows:
        table.add_row(record.source, record.service, entry.id, entry.url or entry.server or "-")
    rprint(table)


@record_app.command("add")
def record_add(
    service: str = typer.Argument(..., help="Publish service"),
    path: str = typer.Argument(".", help="Project directory or document"),
    target_id: str = typer.Option(..., "--id", help="Target identifier"),
    url: Annotated[str | None, typer.Option("--url", help="Published URL")] = None,
    server: Annotated[str | None, typer.Option("--server", help="Server URL (Connect)")] = None,
    dry_run: bool = typer.Option(False, "--dry-run", help="Preview without writing"),
) -> None:
    """Record (or update) a publish target for PATH."""
    cfg = _get_config()
    store = _store_for(path, cfg)

    try:
        spec = get_service(service)
        entry = PublishEntry(id=target_id, url=url, server=server)
    except PublishResolutionError as e:
        raise _fail(e)
    except ValueError as e:
        rprint(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    if spec.locator == "server" and not entry.server:
        rprint(f"[yellow]Warning:[/yellow] {spec.display_name} targets usually record --server")

    try:
        store.add(spec.name, entry, dry_run=dry_run)
    except PublishResolutionError as e:
        raise _fail(e)

    if dry_run:
        rprint("[yellow](dry run, record file not written)[/yellow]")
        rprint(Syntax(yaml.safe_dump([entry.to_yaml_dict()], sort_keys=False), "yaml"))
        return
    rprint(f"[green]Recorded[/green] {spec.name}:{entry.id} in {store.path}")


@record_app.command("remove")
def record_remove(
    service: str = typer.Argument(..., help="Publish service"),
    path: str = typer.Argument(".", help="Project directory or document"),
    target_id: str = typer.Option(..., "--id", help="Target identifier"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Preview without writing"),
) -> None:
    """Remove a recorded publish target."""
    cfg = _get_config()
    store = _store_for(path, cfg)
    try:
        spec = get_service(service)
        removed = store.remove(spec.name, target_id, dry_run=dry_run)
    except PublishResolutionError as e:
        raise _fail(e)

    if not removed:
        rprint(f"[yellow]No {spec.name} record with id {target_id} for {store.source}.[/yellow]")
        raise typer.Exit(1)
    if dry_run:
        rprint("[yellow](dry run, record file not written)[/yellow]")
        rprint(f"Would remove {spec.name}:{target_id} from {store.path}")
        return
    rprint(f"[green]Removed[/green] {spec.name}:{target_id} from {store.path}")


# ---------------------------------------------------------------------------
# Config commands
# ---------------------------------------------------------------------------


@config_app.command("show")
def config_show() -> None:
    """Show current resolved configuration."""
    cfg = _get_config()
    rprint(Syntax(yaml.dump(cfg.model_dump(), default_flow_style=False), "yaml"))


@config_app.command("init")
def config_init(
    force: bool = typer.Option(False, "--force", help="Overwrite existing config"),
) -> None:
    """Create default pubresolve.yaml in current directory."""
    target = Path("pubresolve.yaml")
    if target.exists() and not force:
        rprint("[yellow]pubresolve.yaml already exists.[/yellow] Use --force to overwrite.")
        raise typer.Exit(1)
    target.write_text(DEFAULT_CONFIG_TEMPLATE)
    rprint(f"[green]Created[/green] {target}")
