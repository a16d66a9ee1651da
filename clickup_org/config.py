"""
Central configuration loader.
Environment (via .env) holds the credential and runtime knobs; a YAML file
holds the list mappings, status table and render options.
NEVER logs secret values.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

import yaml
from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from clickup_org.errors import ConfigurationError
from clickup_org.models.mapping import DEFAULT_STATUS_MAPPINGS, ListMapping, StatusMapping


class Settings(BaseSettings):
    """Runtime settings loaded from environment variables"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    CLICKUP_API_TOKEN: Optional[str] = Field(default=None, validation_alias="CLICKUP_API_TOKEN")
    CLICKUP_API_BASE_URL: str = Field(
        default="https://api.clickup.com/api/v2", validation_alias="CLICKUP_API_BASE_URL"
    )
    CLICKUP_CONFIG_FILE: Path = Field(
        default=Path("clickup_org.yaml"), validation_alias="CLICKUP_CONFIG_FILE"
    )
    CLICKUP_DEFAULT_KEYWORD: str = Field(default="TODO", validation_alias="CLICKUP_DEFAULT_KEYWORD")
    CLICKUP_TIMEZONE: str = Field(default="UTC", validation_alias="CLICKUP_TIMEZONE")
    CLICKUP_REQUEST_TIMEOUT: float = Field(default=30.0, validation_alias="CLICKUP_REQUEST_TIMEOUT")
    LOG_LEVEL: str = Field(default="INFO", validation_alias="LOG_LEVEL")


def get_settings() -> Settings:
    load_dotenv()
    return Settings()


# ---------------------------------------------------------------------------
# Sync file (YAML)
# ---------------------------------------------------------------------------
@dataclass
class SyncConfig:
    lists: list[ListMapping] = field(default_factory=list)
    statuses: list[StatusMapping] = field(default_factory=lambda: list(DEFAULT_STATUS_MAPPINGS))
    status_filter: list[str] = field(default_factory=list)
    assignee_filter: bool = False
    custom_fields: list[str] = field(default_factory=list)
    default_keyword: Optional[str] = None


def parse_sync_config(data: dict[str, Any]) -> SyncConfig:
    """Build a SyncConfig from an already-parsed mapping."""
    if not isinstance(data, dict):
        raise ConfigurationError("Sync config must be a mapping at the top level")
    try:
        lists = [ListMapping.from_dict(item) for item in data.get("lists") or []]
        raw_statuses = data.get("statuses")
        statuses = (
            [StatusMapping.from_dict(item) for item in raw_statuses]
            if raw_statuses
            else list(DEFAULT_STATUS_MAPPINGS)
        )
    except (KeyError, TypeError) as e:
        raise ConfigurationError(f"Invalid sync config entry: {e}") from e

    return SyncConfig(
        lists=lists,
        statuses=statuses,
        status_filter=[str(s) for s in data.get("status_filter") or []],
        assignee_filter=bool(data.get("assignee_filter", False)),
        custom_fields=[str(f) for f in data.get("custom_fields") or []],
        default_keyword=data.get("default_keyword"),
    )


def load_sync_config(path: Path) -> SyncConfig:
    if not path.exists():
        raise ConfigurationError(f"Sync config not found: {path}")
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Could not parse {path}: {e}") from e
    return parse_sync_config(data)
