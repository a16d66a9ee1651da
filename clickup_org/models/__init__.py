"""Domain models for the ClickUp ↔ Org synchronisation."""

from clickup_org.models.task import CustomField, FieldOption, NewTask, RemoteTask
from clickup_org.models.mapping import DEFAULT_STATUS_MAPPINGS, ListMapping, StatusMapping

__all__ = [
    "RemoteTask", "CustomField", "FieldOption", "NewTask",
    "ListMapping", "StatusMapping", "DEFAULT_STATUS_MAPPINGS",
]
