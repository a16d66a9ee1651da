"""Unit tests for the pull-sync orchestrator.

The ClickUp client is mocked; documents go to real temp directories.
"""

from __future__ import annotations

import tempfile
import unittest
from datetime import datetime
from pathlib import Path
from unittest.mock import MagicMock

from clickup_org.errors import AuthError, ConfigurationError, TransportError
from clickup_org.integrations.clickup_client import ClickUpClient, FetchResult
from clickup_org.models.mapping import ListMapping
from clickup_org.models.task import NewTask, RemoteTask
from clickup_org.sync.engine import SyncOrchestrator
from clickup_org.sync.renderer import TaskRenderer
from clickup_org.sync.status_mapper import StatusTable
from clickup_org.sync.writer import DocumentWriter
from factories import task_payload


def _tasks(*ids: str) -> list[RemoteTask]:
    return [RemoteTask.from_api(task_payload(task_id)) for task_id in ids]


class TestSyncOrchestrator(unittest.TestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.root = Path(self.tmp.name)
        self.client = MagicMock(spec=ClickUpClient)
        self.table = StatusTable()
        self.writer = DocumentWriter(self.table, clock=lambda: datetime(2026, 1, 1))
        self.mappings = [
            ListMapping("L1", self.root / "one.org", title="One"),
            ListMapping("L2", self.root / "two.org"),
        ]

    def tearDown(self):
        self.tmp.cleanup()

    def make(self, mappings=None, **kwargs) -> SyncOrchestrator:
        return SyncOrchestrator(
            client=self.client,
            renderer=TaskRenderer(self.table),
            writer=self.writer,
            mappings=self.mappings if mappings is None else mappings,
            **kwargs,
        )

    def test_empty_mappings_abort_before_network(self):
        with self.assertRaises(ConfigurationError):
            self.make(mappings=[]).sync_all()
        self.client.fetch_all_tasks.assert_not_called()
        self.client.fetch_current_user.assert_not_called()

    def test_missing_token_aborts(self):
        self.client.require_token.side_effect = ConfigurationError("no token")
        with self.assertRaises(ConfigurationError):
            self.make().sync_all()
        self.client.fetch_all_tasks.assert_not_called()

    def test_sync_all_writes_each_list(self):
        self.client.fetch_all_tasks.side_effect = [
            FetchResult(tasks=_tasks("a", "b"), pages=2),
            FetchResult(tasks=_tasks("c"), pages=2),
        ]
        results = self.make().sync_all()

        self.assertEqual([r.list_id for r in results], ["L1", "L2"])
        self.assertTrue(all(r.ok for r in results))
        one = (self.root / "one.org").read_text(encoding="utf-8")
        self.assertIn("#+TITLE: One", one)
        self.assertLess(one.index(":CLICKUP_ID: a"), one.index(":CLICKUP_ID: b"))
        self.assertIn(":CLICKUP_ID: c", (self.root / "two.org").read_text(encoding="utf-8"))

    def test_filters_passed_to_fetch(self):
        self.client.fetch_current_user.return_value = "42"
        self.client.fetch_all_tasks.return_value = FetchResult(tasks=[], pages=1)
        self.make(
            mappings=self.mappings[:1], status_filter=["to do"], assignee_filter=True
        ).sync_all()
        self.client.fetch_all_tasks.assert_called_once_with(
            "L1", statuses=["to do"], assignee="42"
        )

    def test_no_assignee_lookup_when_disabled(self):
        self.client.fetch_all_tasks.return_value = FetchResult(tasks=[], pages=1)
        self.make(mappings=self.mappings[:1]).sync_all()
        self.client.fetch_current_user.assert_not_called()
        self.client.fetch_all_tasks.assert_called_once_with("L1", statuses=None, assignee=None)

    def test_failure_in_one_list_does_not_block_others(self):
        self.client.fetch_all_tasks.side_effect = [
            FetchResult(tasks=[], pages=0, error=TransportError("down", status_code=503)),
            FetchResult(tasks=_tasks("c"), pages=2),
        ]
        results = self.make().sync_all()
        self.assertFalse(results[0].written)
        self.assertIsNotNone(results[0].error)
        self.assertTrue(results[1].ok)
        self.assertFalse((self.root / "one.org").exists())

    def test_failed_fetch_keeps_previous_document(self):
        (self.root / "one.org").write_text("previous\n", encoding="utf-8")
        self.client.fetch_all_tasks.return_value = FetchResult(
            tasks=[], pages=0, error=TransportError("down")
        )
        self.make(mappings=self.mappings[:1]).sync_all()
        self.assertEqual((self.root / "one.org").read_text(encoding="utf-8"), "previous\n")

    def test_partial_fetch_is_written_and_flagged(self):
        self.client.fetch_all_tasks.return_value = FetchResult(
            tasks=_tasks("a"), pages=1, error=TransportError("timeout")
        )
        result = self.make(mappings=self.mappings[:1]).sync_all()[0]
        self.assertTrue(result.written)
        self.assertTrue(result.partial)
        self.assertFalse(result.ok)
        self.assertEqual(result.task_count, 1)

    def test_user_lookup_failure_ends_that_pass_only(self):
        self.client.fetch_current_user.side_effect = AuthError("bad token", status_code=401)
        results = self.make(assignee_filter=True).sync_all()
        self.assertEqual(len(results), 2)
        self.assertTrue(all(r.error for r in results))
        self.client.fetch_all_tasks.assert_not_called()

    def test_write_failure_reported(self):
        blocker = self.root / "blocker"
        blocker.write_text("", encoding="utf-8")
        self.client.fetch_all_tasks.return_value = FetchResult(tasks=_tasks("a"), pages=2)
        result = self.make(mappings=[ListMapping("L1", blocker / "x.org")]).sync_all()[0]
        self.assertFalse(result.written)
        self.assertIn("Could not write", result.error)

    def _fetch_by_list(self, by_list):
        def fetch(list_id, statuses=None, assignee=None):
            value = by_list[list_id]
            if isinstance(value, Exception):
                raise value
            return value
        return fetch

    def test_render_error_in_one_list_does_not_block_others(self):
        broken = [RemoteTask.from_api(task_payload("a", due_date="1700000000000.0"))]
        self.client.fetch_all_tasks.side_effect = self._fetch_by_list({
            "L1": FetchResult(tasks=broken, pages=2),
            "L2": FetchResult(tasks=_tasks("c"), pages=2),
        })
        results = self.make().sync_all()

        self.assertFalse(results[0].written)
        self.assertIsNotNone(results[0].error)
        self.assertTrue(results[1].ok)
        self.assertFalse((self.root / "one.org").exists())
        self.assertIn(":CLICKUP_ID: c", (self.root / "two.org").read_text(encoding="utf-8"))

    def test_unexpected_error_contained_in_concurrent_mode(self):
        self.client.fetch_all_tasks.side_effect = self._fetch_by_list({
            "L1": RuntimeError("boom"),
            "L2": FetchResult(tasks=_tasks("c"), pages=2),
        })
        results = self.make().sync_all(concurrent=True)

        self.assertEqual([r.list_id for r in results], ["L1", "L2"])
        self.assertEqual(results[0].error, "boom")
        self.assertTrue(results[1].ok)
        self.assertTrue((self.root / "two.org").exists())

    def test_unencodable_title_fails_that_list_only(self):
        self.client.fetch_all_tasks.side_effect = self._fetch_by_list({
            "L1": FetchResult(tasks=_tasks("a"), pages=2),
            "L2": FetchResult(tasks=_tasks("c"), pages=2),
        })
        mappings = [
            ListMapping("L1", self.root / "one.org", title="Ship \ud83d"),
            ListMapping("L2", self.root / "two.org"),
        ]
        results = self.make(mappings=mappings).sync_all()

        self.assertFalse(results[0].written)
        self.assertIn("Could not write", results[0].error)
        self.assertTrue(results[1].ok)

    def test_concurrent_sync(self):
        self.client.fetch_all_tasks.return_value = FetchResult(tasks=_tasks("a"), pages=2)
        results = self.make().sync_all(concurrent=True)
        self.assertEqual([r.list_id for r in results], ["L1", "L2"])
        self.assertTrue((self.root / "one.org").exists())
        self.assertTrue((self.root / "two.org").exists())

    def test_sync_by_list_id(self):
        self.client.fetch_all_tasks.return_value = FetchResult(tasks=_tasks("a"), pages=2)
        result = self.make().sync_by_list_id("L2")
        self.assertEqual(result.list_id, "L2")
        with self.assertRaises(ConfigurationError):
            self.make().sync_by_list_id("unknown")

    def test_render_list_does_not_write(self):
        self.client.fetch_all_tasks.return_value = FetchResult(tasks=_tasks("a"), pages=2)
        text = self.make().render_list("L1")
        self.assertTrue(text.startswith("#+TITLE: One\n"))
        self.assertIn(":CLICKUP_ID: a", text)
        self.assertFalse((self.root / "one.org").exists())

    def test_create_task_assigns_current_user(self):
        self.client.fetch_current_user.return_value = "42"
        self.client.create_task.return_value = "https://app.clickup.com/t/new"
        url = self.make().create_task("L1", NewTask(name="New", status="TODO", assign_to_me=True))
        self.assertEqual(url, "https://app.clickup.com/t/new")
        self.client.create_task.assert_called_once_with(
            "L1", {"name": "New", "description": "", "status": "to do", "assignees": ["42"]}
        )


if __name__ == "__main__":
    unittest.main()
