"""Pull-sync orchestrator — one independent pass per list mapping.

Depends on client/renderer/writer abstractions passed in (Dependency Inversion).
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence

from clickup_org.errors import ClickUpSyncError, ConfigurationError
from clickup_org.integrations.clickup_client import ClickUpClient
from clickup_org.models.mapping import ListMapping
from clickup_org.models.task import NewTask
from clickup_org.sync.renderer import TaskRenderer
from clickup_org.sync.task_builder import build_create_payload
from clickup_org.sync.writer import DocumentWriter

logger = logging.getLogger(__name__)


@dataclass
class SyncResult:
    list_id: str
    path: Path
    task_count: int = 0
    written: bool = False
    partial: bool = False
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.written and self.error is None


class SyncOrchestrator:
    """Drives fetch → render → write for every configured list."""

    def __init__(
        self,
        client: ClickUpClient,
        renderer: TaskRenderer,
        writer: DocumentWriter,
        mappings: Sequence[ListMapping],
        status_filter: Sequence[str] = (),
        assignee_filter: bool = False,
    ):
        self._client = client
        self._renderer = renderer
        self._writer = writer
        self._mappings = list(mappings)
        self._status_filter = list(status_filter)
        self._assignee_filter = assignee_filter

    @property
    def mappings(self) -> list[ListMapping]:
        return list(self._mappings)

    def sync_all(self, concurrent: bool = False) -> list[SyncResult]:
        """Sync every mapping. Raises ConfigurationError before any network call."""
        if not self._mappings:
            raise ConfigurationError("No list mappings configured")
        self._client.require_token()

        if not concurrent or len(self._mappings) == 1:
            return [self.sync_list(m) for m in self._mappings]

        with ThreadPoolExecutor(max_workers=len(self._mappings)) as pool:
            return list(pool.map(self.sync_list, self._mappings))

    def sync_by_list_id(self, list_id: str) -> SyncResult:
        mapping = next((m for m in self._mappings if m.list_id == list_id), None)
        if mapping is None:
            raise ConfigurationError(f"List {list_id} is not configured")
        self._client.require_token()
        return self.sync_list(mapping)

    def sync_list(self, mapping: ListMapping) -> SyncResult:
        """Run one list's pass; any failure is recorded on the result, never raised."""
        result = SyncResult(list_id=mapping.list_id, path=mapping.path)
        try:
            return self._sync_list(mapping, result)
        except Exception as e:
            logger.exception(f"Sync of list {mapping.list_id} failed: {e}")
            result.error = str(e) or type(e).__name__
            return result

    def _sync_list(self, mapping: ListMapping, result: SyncResult) -> SyncResult:
        try:
            assignee = self._client.fetch_current_user() if self._assignee_filter else None
        except ClickUpSyncError as e:
            logger.error(f"Could not resolve current user for list {mapping.list_id}: {e}")
            result.error = str(e)
            return result

        fetched = self._client.fetch_all_tasks(
            mapping.list_id, statuses=self._status_filter or None, assignee=assignee
        )
        result.task_count = len(fetched.tasks)
        if fetched.error is not None:
            result.error = str(fetched.error)
            result.partial = True
            if not fetched.tasks:
                logger.error(f"No tasks fetched for list {mapping.list_id}; keeping {mapping.path}")
                return result

        entries = [self._renderer.render(task) for task in fetched.tasks]
        result.written = self._writer.write(
            mapping.list_id, mapping.path, entries, title=mapping.title
        )
        if not result.written and result.error is None:
            result.error = f"Could not write {mapping.path}"
        return result

    def render_list(self, list_id: str) -> str:
        """Fetch and render a list without touching the filesystem."""
        assignee = self._client.fetch_current_user() if self._assignee_filter else None
        fetched = self._client.fetch_all_tasks(
            list_id, statuses=self._status_filter or None, assignee=assignee
        )
        if fetched.error is not None and not fetched.tasks:
            raise fetched.error
        mapping = next((m for m in self._mappings if m.list_id == list_id), None)
        return self._writer.compose(
            list_id,
            (self._renderer.render(task) for task in fetched.tasks),
            title=mapping.title if mapping else None,
        )

    def create_task(self, list_id: str, new_task: NewTask) -> str:
        assignee = self._client.fetch_current_user() if new_task.assign_to_me else None
        payload = build_create_payload(
            new_task, self._renderer.status_table, assignee_id=assignee, tz=self._renderer.tz
        )
        return self._client.create_task(list_id, payload)
