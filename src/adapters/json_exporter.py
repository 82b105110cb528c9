"""JSON export of a zone and its record sets.

Why JSON:
- Interoperability with other DNS tooling and pipelines.
- The wire encoding is reused, so an export can be replayed as a change.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Iterable

from adapters.wire import AdapterRegistry, encode_many, encode_mapping
from core.domain.models import ManagedZone, ResourceRecordSet


def export_zone_json(
    *,
    zone: ManagedZone | None,
    rrsets: Iterable[ResourceRecordSet],
    adapters: AdapterRegistry,
    output_path: Path,
) -> Path:
    """Write the zone and its record sets as UTF-8 JSON with a stable layout."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    payload = {
        "managedZone": encode_mapping(zone, adapters) if zone is not None else None,
        "rrsets": encode_many(list(rrsets), adapters),
    }
    output_path.write_text(
        json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True) + "\n",
        encoding="utf-8",
    )
    return output_path
