"""
ClickUp API v2 client
"""
from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import Any, Optional, Sequence

import requests

from clickup_org.errors import AuthError, ConfigurationError, TransportError
from clickup_org.models.task import RemoteTask
from clickup_org.utils.redact import redact

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.clickup.com/api/v2"


@dataclass
class FetchResult:
    """Tasks accumulated across pages, plus the error that stopped paging early."""

    tasks: list[RemoteTask] = field(default_factory=list)
    pages: int = 0
    error: Optional[TransportError] = None

    @property
    def partial(self) -> bool:
        return self.error is not None


class ClickUpClient:
    """ClickUp API client with a per-instance cached user id"""

    def __init__(
        self,
        token: Optional[str],
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 30.0,
        session: Optional[requests.Session] = None,
    ):
        self.token = token
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._session = session or requests.Session()
        self._user_id: Optional[str] = None
        self._user_lock = threading.Lock()

    def require_token(self) -> str:
        if not self.token:
            raise ConfigurationError("CLICKUP_API_TOKEN is not set")
        return self.token

    def _get_headers(self) -> dict[str, str]:
        return {
            "Authorization": self.require_token(),
            "Content-Type": "application/json",
        }

    def _request(
        self,
        method: str,
        path: str,
        params: Optional[list[tuple[str, Any]]] = None,
        json: Optional[dict[str, Any]] = None,
    ) -> dict[str, Any]:
        headers = self._get_headers()
        url = f"{self.base_url}{path}"

        try:
            resp = self._session.request(
                method, url, headers=headers, params=params, json=json, timeout=self.timeout
            )
        except requests.RequestException as e:
            raise TransportError(f"{method} {path} failed: {e}") from e

        if resp.status_code in (401, 403):
            raise AuthError(
                f"{method} {path} rejected credential (HTTP {resp.status_code})",
                status_code=resp.status_code,
                body=resp.text,
            )
        if not resp.ok:
            logger.debug(f"{method} {path} error body: {redact(resp.text)}")
            raise TransportError(
                f"{method} {path} failed with HTTP {resp.status_code}",
                status_code=resp.status_code,
                body=resp.text,
            )

        if not resp.content:
            return {}
        try:
            return resp.json()
        except ValueError as e:
            raise TransportError(
                f"{method} {path} returned invalid JSON",
                status_code=resp.status_code,
                body=resp.text,
            ) from e

    # -- User ------------------------------------------------------------------

    def fetch_current_user(self) -> str:
        """Return the authenticated user's id, fetching it at most once."""
        with self._user_lock:
            if self._user_id is not None:
                return self._user_id

        data = self._request("GET", "/user")
        try:
            user_id = str(data["user"]["id"])
        except (KeyError, TypeError) as e:
            raise TransportError("GET /user returned no user id", body=str(data)) from e

        with self._user_lock:
            if self._user_id is None:
                self._user_id = user_id
            return self._user_id

    # -- Tasks -----------------------------------------------------------------

    def fetch_tasks_page(
        self,
        list_id: str,
        page: int,
        statuses: Optional[Sequence[str]] = None,
        assignee: Optional[str] = None,
    ) -> tuple[list[RemoteTask], bool]:
        """Fetch one page of a list's tasks. The page is last when it is empty."""
        params: list[tuple[str, Any]] = [("archived", "false"), ("page", page)]
        for status in statuses or ():
            params.append(("statuses[]", status))
        if assignee:
            params.append(("assignees[]", assignee))

        data = self._request("GET", f"/list/{list_id}/task", params=params)
        tasks = [RemoteTask.from_api(raw) for raw in data.get("tasks", []) or []]
        return tasks, not tasks

    def fetch_all_tasks(
        self,
        list_id: str,
        statuses: Optional[Sequence[str]] = None,
        assignee: Optional[str] = None,
    ) -> FetchResult:
        """Page through a list sequentially until an empty page.

        A transport failure stops paging; whatever was accumulated is returned
        with the error attached.
        """
        result = FetchResult()
        page = 0
        while True:
            try:
                tasks, is_last = self.fetch_tasks_page(list_id, page, statuses, assignee)
            except TransportError as e:
                logger.warning(
                    f"Fetching list {list_id} stopped at page {page} "
                    f"with {len(result.tasks)} tasks: {e}"
                )
                result.error = e
                return result
            result.pages += 1
            if is_last:
                logger.info(f"Fetched {len(result.tasks)} tasks from list {list_id} in {page} pages")
                return result
            result.tasks.extend(tasks)
            page += 1

    def push_status(self, task_id: str, remote_status: str) -> None:
        logger.info(f"Updating ClickUp task {task_id} status to '{remote_status}'")
        self._request("PUT", f"/task/{task_id}", json={"status": remote_status})

    def create_task(self, list_id: str, payload: dict[str, Any]) -> str:
        """Create a task in a list and return its URL"""
        body = {k: v for k, v in payload.items() if v is not None}
        logger.info(f"Creating ClickUp task in list {list_id}: {body.get('name')}")
        data = self._request("POST", f"/list/{list_id}/task", json=body)
        url = data.get("url", "")
        logger.info(f"Created task {data.get('id')}: {url}")
        return url
