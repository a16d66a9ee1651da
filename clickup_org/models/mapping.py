"""Configuration records — list-to-document and status mappings."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional


@dataclass(frozen=True)
class ListMapping:
    """One ClickUp list rendered into one Org document."""

    list_id: str
    path: Path
    title: Optional[str] = None

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "ListMapping":
        return cls(
            list_id=str(raw["list_id"]),
            path=Path(raw["path"]).expanduser(),
            title=raw.get("title"),
        )


@dataclass(frozen=True)
class StatusMapping:
    """A ClickUp status name paired with an Org TODO keyword."""

    remote: str
    local: str
    done: bool = False

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "StatusMapping":
        return cls(
            remote=str(raw["remote"]),
            local=str(raw["local"]),
            done=bool(raw.get("done", False)),
        )


DEFAULT_STATUS_MAPPINGS: tuple[StatusMapping, ...] = (
    StatusMapping("to do", "TODO"),
    StatusMapping("in progress", "IN-PROGRESS"),
    StatusMapping("review", "REVIEW"),
    StatusMapping("complete", "DONE", done=True),
)
