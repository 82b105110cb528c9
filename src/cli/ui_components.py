"""CLI UI components (Rich).

Why separate components:
- Keeps command logic apart from presentation details.
- Tables are reused by several commands.
"""

from __future__ import annotations

from typing import Iterable

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.models import Change, ManagedZone, Project, ResourceRecordSet


def build_project_panel(project: Project) -> Panel:
    """Panel with the project identity and its quota."""

    quota = project.quota
    body = Text()
    body.append(f"id: {project.id}\n", style="bold")
    body.append(f"number: {project.number}\n\n")
    body.append("Quota:\n", style="bold")
    body.append(f"- managed zones: {quota.managed_zones}\n")
    body.append(f"- rrsets per zone: {quota.rrsets_per_managed_zone}\n")
    body.append(f"- additions per change: {quota.rrset_additions_per_change}\n")
    body.append(f"- deletions per change: {quota.rrset_deletions_per_change}\n")
    body.append(f"- rrdata bytes per change: {quota.total_rrdata_size_per_change}\n")
    body.append(f"- records per rrset: {quota.resource_records_per_rrset}")
    return Panel(body, title=Text("Project", style="bold cyan"), border_style="cyan")


def build_zones_table(zones: Iterable[ManagedZone]) -> Table:
    table = Table(title="Managed Zones")
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("DNS name", style="white")
    table.add_column("Id", style="dim")
    table.add_column("Created", style="green")
    table.add_column("Description", style="magenta")
    for zone in zones:
        table.add_row(
            zone.name,
            zone.dns_name,
            str(zone.id),
            zone.creation_time.isoformat(),
            zone.description or "",
        )
    return table


def build_rrsets_table(rrsets: Iterable[ResourceRecordSet]) -> Table:
    table = Table(title="Record Sets")
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Type", style="yellow")
    table.add_column("TTL", style="dim")
    table.add_column("Data", style="white")
    for rrset in rrsets:
        table.add_row(
            rrset.name,
            rrset.type,
            "" if rrset.ttl is None else str(rrset.ttl),
            "\n".join(rrset.rrdatas),
        )
    return table


def build_changes_table(changes: Iterable[Change]) -> Table:
    table = Table(title="Changes")
    table.add_column("Id", style="cyan", no_wrap=True)
    table.add_column("Status", style="green")
    table.add_column("Started", style="dim")
    table.add_column("+", style="green")
    table.add_column("-", style="red")
    for change in changes:
        table.add_row(
            "" if change.id is None else str(change.id),
            change.status or "",
            change.start_time.isoformat() if change.start_time else "",
            str(len(change.additions)),
            str(len(change.deletions)),
        )
    return table
