"""Command line interface (Typer + Rich).

Commands are thin: they resolve settings, call the API bindings and render
the result. All failures of the client surface as `CloudDnsError` and are
reported here with a non-zero exit code.
"""

from __future__ import annotations

import json
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

import typer
from rich.console import Console

from adapters.cloud_dns import CloudDnsApi, build_api
from adapters.json_exporter import export_zone_json
from adapters.wire import encode_many, encode_mapping
from cli import doctor
from cli.ui_components import (
    build_changes_table,
    build_project_panel,
    build_rrsets_table,
    build_zones_table,
)
from core.config import AppSettings
from core.domain.options import ListOptions, SortOrder
from core.errors import CloudDnsError
from core.logging_config import configure_logging

app = typer.Typer(no_args_is_help=True, help="Cloud DNS client: projects, zones, record sets and changes.")
zones_app = typer.Typer(no_args_is_help=True, help="Managed zones.")
records_app = typer.Typer(no_args_is_help=True, help="Resource record sets.")
changes_app = typer.Typer(no_args_is_help=True, help="Changes applied to a zone.")

app.add_typer(zones_app, name="zones")
app.add_typer(records_app, name="records")
app.add_typer(changes_app, name="changes")
app.add_typer(doctor.app, name="doctor")

_console = Console()

ProjectOption = typer.Option(None, "--project", "-p", help="Project id (defaults to CLOUD_DNS_DEFAULT_PROJECT).")
PageSizeOption = typer.Option(None, "--page-size", min=0, max=100, help="maxResults per page.")
JsonOption = typer.Option(False, "--json", help="Print the wire JSON instead of a table.")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log HTTP requests and page fetches."),
) -> None:
    settings = AppSettings()
    configure_logging("DEBUG" if verbose else settings.log_level)


def _project(settings: AppSettings, project: str | None) -> str:
    resolved = project or settings.default_project
    if not resolved:
        raise typer.BadParameter("no project given; pass --project or set CLOUD_DNS_DEFAULT_PROJECT")
    return resolved


def _options(settings: AppSettings, page_size: int | None) -> ListOptions:
    options = ListOptions()
    size = page_size if page_size is not None else settings.default_page_size
    if size is not None:
        options = options.max_results(size)
    return options


@contextmanager
def _api(settings: AppSettings) -> Iterator[CloudDnsApi]:
    try:
        with build_api(settings) as api:
            yield api
    except CloudDnsError as exc:
        _console.print(f"[red]Error:[/red] {exc}")
        raise typer.Exit(code=1) from exc


def _print_json(data: object) -> None:
    _console.print_json(json.dumps(data, ensure_ascii=False))


@app.command()
def project(project: Optional[str] = ProjectOption, as_json: bool = JsonOption) -> None:
    """Show a project and its quota."""

    settings = AppSettings()
    project_id = _project(settings, project)
    with _api(settings) as api:
        found = api.projects().get(project_id)
        if found is None:
            _console.print(f"[yellow]Project {project_id!r} not found.[/yellow]")
            raise typer.Exit(code=1)
        if as_json:
            _print_json(encode_mapping(found, api.adapters))
        else:
            _console.print(build_project_panel(found))


@zones_app.command("list")
def zones_list(
    project: Optional[str] = ProjectOption,
    page_size: Optional[int] = PageSizeOption,
    as_json: bool = JsonOption,
) -> None:
    """List every managed zone of the project."""

    settings = AppSettings()
    project_id = _project(settings, project)
    with _api(settings) as api:
        zones = api.managed_zones(project_id).list(_options(settings, page_size)).to_list()
        if as_json:
            _print_json(encode_many(zones, api.adapters))
        else:
            _console.print(build_zones_table(zones))


@zones_app.command("get")
def zones_get(name: str, project: Optional[str] = ProjectOption, as_json: bool = JsonOption) -> None:
    """Show one managed zone."""

    settings = AppSettings()
    project_id = _project(settings, project)
    with _api(settings) as api:
        zone = api.managed_zones(project_id).get(name)
        if zone is None:
            _console.print(f"[yellow]Zone {name!r} not found.[/yellow]")
            raise typer.Exit(code=1)
        if as_json:
            _print_json(encode_mapping(zone, api.adapters))
        else:
            _console.print(build_zones_table([zone]))


@zones_app.command("create")
def zones_create(
    name: str,
    dns_name: str = typer.Argument(..., help="Domain with trailing period, e.g. example.com."),
    description: Optional[str] = typer.Option(None, "--description", "-d"),
    project: Optional[str] = ProjectOption,
) -> None:
    """Create a managed zone."""

    settings = AppSettings()
    project_id = _project(settings, project)
    with _api(settings) as api:
        zone = api.managed_zones(project_id).create(name, dns_name, description)
        _console.print(build_zones_table([zone]))


@zones_app.command("delete")
def zones_delete(name: str, project: Optional[str] = ProjectOption) -> None:
    """Delete a managed zone (no-op when it does not exist)."""

    settings = AppSettings()
    project_id = _project(settings, project)
    with _api(settings) as api:
        api.managed_zones(project_id).delete(name)
    _console.print(f"[green]Deleted[/green] {name}")


@records_app.command("list")
def records_list(
    zone: str,
    name: Optional[str] = typer.Option(None, "--name", help="Exact fully qualified name, e.g. www.example.com."),
    record_type: Optional[str] = typer.Option(None, "--type", help="Record type; requires --name."),
    page_size: Optional[int] = PageSizeOption,
    export: Optional[Path] = typer.Option(None, "--export", help="Write the zone and its records to a JSON file."),
    project: Optional[str] = ProjectOption,
    as_json: bool = JsonOption,
) -> None:
    """List the record sets of a zone."""

    settings = AppSettings()
    project_id = _project(settings, project)
    options = _options(settings, page_size)
    if record_type:
        if not name:
            raise typer.BadParameter("--type requires --name")
        options = options.type_with_name(record_type, name)
    elif name:
        options = options.name(name)

    with _api(settings) as api:
        rrsets = api.resource_record_sets(project_id).list_in_managed_zone(zone, options).to_list()
        if export is not None:
            managed_zone = api.managed_zones(project_id).get(zone)
            path = export_zone_json(zone=managed_zone, rrsets=rrsets, adapters=api.adapters, output_path=export)
            _console.print(f"[green]Exported[/green] {len(rrsets)} record sets to {path}")
        if as_json:
            _print_json(encode_many(rrsets, api.adapters))
        elif export is None:
            _console.print(build_rrsets_table(rrsets))


@changes_app.command("list")
def changes_list(
    zone: str,
    page_size: Optional[int] = PageSizeOption,
    ascending: bool = typer.Option(False, "--ascending", help="Oldest first."),
    project: Optional[str] = ProjectOption,
    as_json: bool = JsonOption,
) -> None:
    """List the changes applied to a zone."""

    settings = AppSettings()
    project_id = _project(settings, project)
    options = _options(settings, page_size).sort_order(SortOrder.ASCENDING if ascending else SortOrder.DESCENDING)
    with _api(settings) as api:
        changes = api.changes(project_id).list_in_managed_zone(zone, options).to_list()
        if as_json:
            _print_json(encode_many(changes, api.adapters))
        else:
            _console.print(build_changes_table(changes))


def run() -> None:
    app()
