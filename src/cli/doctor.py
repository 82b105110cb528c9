"""Doctor command for environment diagnostics."""

from __future__ import annotations

import httpx
import typer
from rich.console import Console
from rich.table import Table

from adapters.cloud_dns.base import segment
from adapters.http_client import HttpTransport
from core.config import AppSettings, get_user_env_file, write_user_env_vars
from core.errors import FetchError, NotFoundError

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


def _check_api(
    settings: AppSettings,
    project: str,
    *,
    transport: httpx.BaseTransport | None = None,
) -> tuple[bool, str]:
    """Fetch the project resource to check connectivity and credentials."""

    try:
        with HttpTransport.from_settings(settings, transport=transport) as http:
            http.fetch(f"/projects/{segment(project)}")
        return True, "OK"
    except NotFoundError:
        return False, f"project {project!r} not found"
    except FetchError as exc:
        return False, str(exc)


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = AppSettings()

    table = Table(title="Cloud DNS Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    # Config
    table.add_row("API base_url", "OK", settings.api_base_url)
    if settings.access_token:
        table.add_row("Access token", "OK", "Bearer token configured")
    else:
        table.add_row("Access token", "MISSING", "Requests will be anonymous and rejected")
    if settings.default_project:
        table.add_row("Default project", "OK", settings.default_project)
    else:
        table.add_row("Default project", "OPTIONAL", "Pass --project on every command")
    table.add_row("User config", "INFO", str(get_user_env_file()))

    # Connectivity (best-effort)
    if settings.default_project:
        ok_api, detail_api = _check_api(settings, settings.default_project)
        table.add_row("API connectivity", "OK" if ok_api else "FAIL", detail_api)

    _console.print(table)


@app.command(name="configure")
def configure() -> None:
    """Interactive setup (stores config in the user config .env)."""

    project = typer.prompt("Default project", default="", show_default=False).strip()
    token = typer.prompt("Access token", hide_input=True, confirmation_prompt=False).strip()
    base_url = typer.prompt("API base URL", default=AppSettings().api_base_url, show_default=True).strip()

    if not token:
        raise typer.BadParameter("access token is required")

    values = {
        "CLOUD_DNS_ACCESS_TOKEN": token,
        "CLOUD_DNS_API_BASE_URL": base_url,
    }
    if project:
        values["CLOUD_DNS_DEFAULT_PROJECT"] = project
    env_path = write_user_env_vars(values)

    _console.print(f"[green]Saved config to:[/green] {env_path}")
