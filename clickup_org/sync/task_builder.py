"""Build the ClickUp create-task payload from validated local input."""

from __future__ import annotations

from datetime import date, datetime, time, timezone, tzinfo
from typing import Any, Optional

from clickup_org.models.task import NewTask
from clickup_org.sync.status_mapper import StatusTable


def date_to_millis(day: date, tz: tzinfo = timezone.utc) -> int:
    """Midnight of ``day`` in ``tz`` as epoch milliseconds."""
    return int(datetime.combine(day, time.min, tzinfo=tz).timestamp()) * 1000


def build_create_payload(
    new_task: NewTask,
    status_table: StatusTable,
    assignee_id: Optional[str] = None,
    tz: tzinfo = timezone.utc,
) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "name": new_task.name,
        "description": new_task.description,
    }

    if new_task.status:
        remote_status = status_table.local_to_remote(new_task.status)
        if remote_status:
            payload["status"] = remote_status

    if assignee_id:
        payload["assignees"] = [assignee_id]
    if new_task.start_date:
        payload["start_date"] = date_to_millis(new_task.start_date, tz)
    if new_task.due_date:
        payload["due_date"] = date_to_millis(new_task.due_date, tz)

    return payload
