"""Remote task model — immutable snapshot of a ClickUp task as fetched."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Optional


@dataclass(frozen=True)
class FieldOption:
    """One entry of an enumerated custom field's options table."""

    id: str
    name: Optional[str] = None
    label: Optional[str] = None
    orderindex: Optional[int] = None

    @classmethod
    def from_api(cls, raw: dict[str, Any]) -> "FieldOption":
        return cls(
            id=str(raw.get("id", "")),
            name=raw.get("name"),
            label=raw.get("label"),
            orderindex=raw.get("orderindex"),
        )


@dataclass(frozen=True)
class CustomField:
    """A user-defined task attribute.

    ``type_config`` keeps the raw configuration for field types whose schema
    is not modelled here.
    """

    id: str
    name: str
    type: str
    value: Any = None
    options: tuple[FieldOption, ...] = ()
    type_config: dict[str, Any] = field(default_factory=dict, compare=False)

    @classmethod
    def from_api(cls, raw: dict[str, Any]) -> "CustomField":
        type_config = raw.get("type_config") or {}
        options = tuple(
            FieldOption.from_api(opt) for opt in type_config.get("options", []) or []
        )
        return cls(
            id=str(raw.get("id", "")),
            name=raw.get("name", ""),
            type=raw.get("type", ""),
            value=raw.get("value"),
            options=options,
            type_config=type_config,
        )


def _empty_to_none(raw: Any) -> Optional[str]:
    if raw is None or raw == "":
        return None
    return str(raw)


@dataclass(frozen=True)
class RemoteTask:
    """A ClickUp task. Timestamps are epoch-millisecond strings."""

    id: str
    name: str
    status: str
    description: str = ""
    priority: Optional[str] = None
    due_date: Optional[str] = None
    start_date: Optional[str] = None
    url: str = ""
    custom_id: Optional[str] = None
    custom_fields: tuple[CustomField, ...] = ()

    @classmethod
    def from_api(cls, raw: dict[str, Any]) -> "RemoteTask":
        status = raw.get("status") or {}
        if isinstance(status, dict):
            status = status.get("status", "")

        priority = raw.get("priority")
        if isinstance(priority, dict):
            priority = priority.get("orderindex") or priority.get("id")

        return cls(
            id=str(raw["id"]),
            name=raw.get("name", ""),
            status=str(status),
            description=raw.get("description") or raw.get("text_content") or "",
            priority=_empty_to_none(priority),
            due_date=_empty_to_none(raw.get("due_date")),
            start_date=_empty_to_none(raw.get("start_date")),
            url=raw.get("url", ""),
            custom_id=_empty_to_none(raw.get("custom_id")),
            custom_fields=tuple(
                CustomField.from_api(cf) for cf in raw.get("custom_fields", []) or []
            ),
        )


@dataclass
class NewTask:
    """Validated input for creating a remote task."""

    name: str
    description: str = ""
    status: Optional[str] = None
    assign_to_me: bool = False
    start_date: Optional[date] = None
    due_date: Optional[date] = None
