"""Shared fixtures: sample wire payloads and an httpx mock transport."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Any, Callable

import httpx
import pytest

from adapters.cloud_dns import CloudDnsApi
from adapters.http_client import HttpTransport
from adapters.wire import default_adapters
from core.config import AppSettings

CREATED = datetime(2014, 10, 24, 12, 30, tzinfo=timezone.utc)

ZONE_PAYLOAD: dict[str, Any] = {
    "kind": "dns#managedZone",
    "name": "example-zone",
    "dnsName": "example.com.",
    "description": "primary zone",
    "id": "1234567890",
    "nameServers": ["ns-cloud-b2.googledomains.com.", "ns-cloud-b1.googledomains.com."],
    "creationTime": "2014-10-24T12:30:00.000Z",
}

PROJECT_PAYLOAD: dict[str, Any] = {
    "kind": "dns#project",
    "id": "my-project",
    "number": "31415926",
    "quota": {
        "kind": "dns#quota",
        "managedZones": 100,
        "rrsetsPerManagedZone": 10000,
        "rrsetAdditionsPerChange": 100,
        "rrsetDeletionsPerChange": 100,
        "totalRrdataSizePerChange": 10000,
        "resourceRecordsPerRrset": 100,
    },
}

RRSET_PAYLOAD: dict[str, Any] = {
    "kind": "dns#resourceRecordSet",
    "name": "www.example.com.",
    "type": "A",
    "ttl": 300,
    "rrdatas": ["10.0.0.2", "10.0.0.1"],
}

CHANGE_PAYLOAD: dict[str, Any] = {
    "kind": "dns#change",
    "additions": [RRSET_PAYLOAD],
    "deletions": [],
    "startTime": "2014-10-24T12:31:00.000Z",
    "id": "7",
    "status": "pending",
}


@pytest.fixture
def adapters():
    return default_adapters()


@pytest.fixture
def settings() -> AppSettings:
    return AppSettings(
        _env_file=None,
        api_base_url="https://dns.test/dns/v1",
        access_token="secret-token",
        http_retries=0,
    )


Handler = Callable[[httpx.Request], httpx.Response]


@pytest.fixture
def make_api(settings: AppSettings):
    """Build a `CloudDnsApi` whose requests are answered by `handler`."""

    def _make(handler: Handler) -> CloudDnsApi:
        transport = HttpTransport.from_settings(settings, transport=httpx.MockTransport(handler))
        return CloudDnsApi(transport)

    return _make


def json_response(data: Any, status_code: int = 200) -> httpx.Response:
    return httpx.Response(status_code, content=json.dumps(data).encode("utf-8"))
