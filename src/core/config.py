"""Configuration of the client.

Why here:
- Centralizes environment variables (pydantic-settings) away from the CLI.
- Lets adapters (HTTP transport, API bindings) read config consistently.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def get_user_config_dir() -> Path:
    """Per-user configuration directory (cross-platform, no extra dependencies)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "cloud-dns"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "cloud-dns"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "cloud-dns"
    return Path.home() / ".config" / "cloud-dns"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def _parse_env_lines(text: str) -> dict[str, str]:
    data: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        if key:
            data[key] = value
    return data


def write_user_env_vars(values: dict[str, str]) -> Path:
    """Write or update variables in the user-level .env file."""

    env_path = get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        try:
            existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError):
            existing = {}

    existing.update({k: v for k, v in values.items() if v is not None})

    lines = ["# cloud-dns user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


SETTINGS_ENV_PREFIX = "CLOUD_DNS_"


class AppSettings(BaseSettings):
    """Central application configuration.

    Why pydantic-settings:
    - Typed and validated at the edge (env vars), no parsing logic in the core.
    - One configuration contract shared by the CLI and the adapters.
    """

    model_config = SettingsConfigDict(
        env_prefix=SETTINGS_ENV_PREFIX,
        extra="ignore",
        case_sensitive=False,
        # Order: project first (dev), then the user-level config.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    api_base_url: str = Field(
        default="https://dns.googleapis.com/dns/v1",
        min_length=8,
        description="Root URL of the Cloud DNS API; paths start at /projects.",
    )
    http_timeout_seconds: float = Field(
        default=20.0,
        gt=0,
        description="Per-request timeout (seconds).",
    )
    http_retries: int = Field(
        default=2,
        ge=0,
        le=10,
        description="Connection-level retries of the HTTP transport.",
    )
    user_agent: str = Field(
        default="cloud-dns-client/0.1",
        min_length=1,
        description="User-Agent sent with every request.",
    )

    access_token: str | None = Field(
        default=None,
        description="OAuth2 bearer token; requests are anonymous when unset.",
    )
    default_project: str | None = Field(
        default=None,
        description="Project used by the CLI when --project is omitted.",
    )
    default_page_size: int | None = Field(
        default=None,
        ge=0,
        le=100,
        description="maxResults used by the CLI when --page-size is omitted.",
    )

    log_level: str = Field(
        default="WARNING",
        description="Root log level for the CLI (DEBUG, INFO, WARNING, ERROR).",
    )
