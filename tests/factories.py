"""Builders for ClickUp API payloads and mocked HTTP responses."""
from __future__ import annotations

from typing import Any
from unittest.mock import MagicMock


def task_payload(task_id: str = "abc123", **overrides: Any) -> dict[str, Any]:
    """A ClickUp task as returned by GET /list/{id}/task."""
    payload: dict[str, Any] = {
        "id": task_id,
        "name": f"Task {task_id}",
        "description": "",
        "status": {"status": "to do", "type": "open"},
        "priority": None,
        "due_date": None,
        "start_date": None,
        "url": f"https://app.clickup.com/t/{task_id}",
        "custom_id": None,
        "custom_fields": [],
    }
    payload.update(overrides)
    return payload


def fake_response(status_code: int = 200, json_data: Any = None, text: str = "") -> MagicMock:
    resp = MagicMock()
    resp.status_code = status_code
    resp.ok = 200 <= status_code < 400
    resp.json.return_value = json_data if json_data is not None else {}
    resp.content = b"{}" if json_data is not None else text.encode()
    resp.text = text
    return resp
