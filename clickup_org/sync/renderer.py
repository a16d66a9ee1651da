"""Render a ClickUp task into an Org-mode heading entry.

Pure transform: no I/O, deterministic for a given timezone.
"""

from __future__ import annotations

import re
from datetime import date, datetime, timezone, tzinfo
from typing import Any, Iterable, Optional

from clickup_org.models.task import CustomField, RemoteTask
from clickup_org.sync.status_mapper import StatusTable

ID_PROPERTY = "CLICKUP_ID"
FIELD_PROPERTY_PREFIX = "CLICKUP_"

ENUM_FIELD_TYPES = ("drop_down", "labels")
LINK_FIELD_TYPES = ("url", "link")
OPTION_SEPARATOR = ", "

_WEEKDAYS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
_BLOCK_SYNTAX = re.compile(r"^(\s*)(,*(?:\*|#\+))")
_LINE_BREAKS = re.compile(r"\s*[\r\n]+\s*")


def priority_tag(priority: Optional[str]) -> str:
    if priority == "1":
        return "[#A]"
    if priority == "2":
        return "[#B]"
    return "[#C]"


def millis_to_date(raw: Optional[str], tz: tzinfo = timezone.utc) -> Optional[date]:
    """Convert an epoch-millisecond string to a date; sub-second part is dropped."""
    if raw is None or raw == "":
        return None
    seconds = int(raw) // 1000
    return datetime.fromtimestamp(seconds, tz=tz).date()


def org_timestamp(day: date) -> str:
    return f"<{day.isoformat()} {_WEEKDAYS[day.weekday()]}>"


def field_property_name(field_name: str) -> str:
    return FIELD_PROPERTY_PREFIX + field_name.upper().replace(" ", "_")


def format_field_value(cf: CustomField) -> str:
    value = cf.value
    if cf.type in ENUM_FIELD_TYPES:
        selected = value if isinstance(value, list) else [value]
        return single_line(OPTION_SEPARATOR.join(_resolve_option(cf, item) for item in selected))
    if cf.type in LINK_FIELD_TYPES and isinstance(value, dict) and "value" in value:
        value = value["value"]
    return single_line(str(value))


def single_line(text: str) -> str:
    """Property values end at the line break, so folded lines join with a space."""
    return _LINE_BREAKS.sub(" ", text).strip()


def escape_block_line(line: str) -> str:
    """Comma-quote lines Org would read as a heading or block keyword."""
    return _BLOCK_SYNTAX.sub(r"\1,\2", line)


def _resolve_option(cf: CustomField, selected: Any) -> str:
    for option in cf.options:
        if option.id == str(selected):
            return option.label or option.name or option.id
    # drop_down values may arrive as the option's orderindex
    for option in cf.options:
        if option.orderindex is not None and str(option.orderindex) == str(selected):
            return option.label or option.name or option.id
    return str(selected)


class TaskRenderer:
    """Turns RemoteTask records into Org entries."""

    def __init__(
        self,
        status_table: StatusTable,
        custom_fields: Iterable[str] = (),
        tz: tzinfo = timezone.utc,
    ):
        self.status_table = status_table
        self.custom_fields = set(custom_fields)
        self.tz = tz

    def render(self, task: RemoteTask) -> str:
        keyword = self.status_table.remote_to_local(task.status)
        lines = [f"* {keyword} {priority_tag(task.priority)} {task.name}"]

        lines.append(":PROPERTIES:")
        lines.append(f":{ID_PROPERTY}: {task.id}")
        if task.custom_id:
            lines.append(f":CUSTOM_ID: {task.custom_id}")
        lines.append(f":URL: {task.url}")
        for cf in task.custom_fields:
            if cf.name in self.custom_fields and cf.value is not None:
                lines.append(f":{field_property_name(cf.name)}: {format_field_value(cf)}")
        lines.append(":END:")

        planning = []
        due = millis_to_date(task.due_date, self.tz)
        if due:
            planning.append(f"DEADLINE: {org_timestamp(due)}")
        start = millis_to_date(task.start_date, self.tz)
        if start:
            planning.append(f"SCHEDULED: {org_timestamp(start)}")
        if planning:
            lines.append(" ".join(planning))

        if task.description:
            lines.append("#+BEGIN_EXAMPLE")
            lines.extend(
                f"  {escape_block_line(line)}" if line else ""
                for line in task.description.splitlines()
            )
            lines.append("#+END_EXAMPLE")

        return "\n".join(lines) + "\n\n"


def render_task(task: RemoteTask, status_table: Optional[StatusTable] = None) -> str:
    """Render with the default status table and no custom fields."""
    return TaskRenderer(status_table or StatusTable()).render(task)
