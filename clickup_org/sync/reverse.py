"""Reverse sync — push local status keyword changes back to ClickUp."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Mapping, Optional

from clickup_org.errors import TransportError
from clickup_org.integrations.clickup_client import ClickUpClient
from clickup_org.sync.renderer import ID_PROPERTY
from clickup_org.sync.status_mapper import StatusTable

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StatusChangeEvent:
    """A local entry's keyword transition, with the entry's property store."""

    properties: Mapping[str, str] = field(default_factory=dict)
    new_keyword: Optional[str] = None
    old_keyword: Optional[str] = None


Listener = Callable[[StatusChangeEvent], object]


class StatusChangeEmitter:
    """In-process stand-in for the editor's status-change hook."""

    def __init__(self) -> None:
        self._listeners: list[Listener] = []

    def subscribe(self, listener: Listener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    @property
    def listeners(self) -> list[Listener]:
        return list(self._listeners)

    def emit(self, event: StatusChangeEvent) -> None:
        for listener in list(self._listeners):
            listener(event)


class ReverseSyncHandler:
    """Stateless between events; safe to attach and detach at any time."""

    def __init__(
        self,
        client: ClickUpClient,
        status_table: StatusTable,
        id_property: str = ID_PROPERTY,
    ):
        self._client = client
        self._status_table = status_table
        self._id_property = id_property

    def __call__(self, event: StatusChangeEvent) -> bool:
        return self.handle(event)

    def attach(self, source: StatusChangeEmitter) -> None:
        source.subscribe(self)

    def detach(self, source: StatusChangeEmitter) -> None:
        source.unsubscribe(self)

    def handle(self, event: StatusChangeEvent) -> bool:
        """Push the new status. Returns True only when an update was sent."""
        task_id = event.properties.get(self._id_property)
        if not task_id or not event.new_keyword:
            return False

        remote_status = self._status_table.local_to_remote(event.new_keyword)
        if remote_status is None:
            logger.warning(
                f"Keyword {event.new_keyword} has no ClickUp status; not pushing task {task_id}"
            )
            return False

        try:
            self._client.push_status(task_id, remote_status)
        except TransportError as e:
            logger.error(f"Failed to push status for task {task_id}: {e}")
            return False
        return True
