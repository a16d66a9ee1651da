"""Sync module: status mapping, rendering, writing and orchestration."""

from clickup_org.sync.status_mapper import StatusTable
from clickup_org.sync.renderer import TaskRenderer, render_task
from clickup_org.sync.writer import DocumentWriter
from clickup_org.sync.engine import SyncOrchestrator, SyncResult
from clickup_org.sync.reverse import ReverseSyncHandler, StatusChangeEmitter, StatusChangeEvent

__all__ = [
    "StatusTable", "TaskRenderer", "render_task", "DocumentWriter",
    "SyncOrchestrator", "SyncResult",
    "ReverseSyncHandler", "StatusChangeEmitter", "StatusChangeEvent",
]
