"""Status mapping between ClickUp status names and Org TODO keywords.

Single Responsibility: only maps statuses.  No side effects beyond logging.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from clickup_org.models.mapping import DEFAULT_STATUS_MAPPINGS, StatusMapping

logger = logging.getLogger(__name__)


class StatusTable:
    """Bidirectional lookup; first entry wins on duplicate remote names."""

    def __init__(
        self,
        entries: Iterable[StatusMapping] = DEFAULT_STATUS_MAPPINGS,
        default_keyword: str = "TODO",
    ):
        self._entries = list(entries)
        self.default_keyword = default_keyword

        seen: set[str] = set()
        for entry in self._entries:
            key = entry.remote.lower()
            if key in seen:
                logger.warning(f"Duplicate remote status '{entry.remote}' in status table; first entry wins")
            seen.add(key)

    @property
    def entries(self) -> list[StatusMapping]:
        return list(self._entries)

    def remote_to_local(self, remote_name: str) -> str:
        """Map a ClickUp status name to a keyword, falling back to the default."""
        needle = (remote_name or "").lower()
        for entry in self._entries:
            if entry.remote.lower() == needle:
                return entry.local
        logger.warning(
            f"No keyword mapped for remote status '{remote_name}', using {self.default_keyword}"
        )
        return self.default_keyword

    def local_to_remote(self, keyword: str) -> Optional[str]:
        """Map a keyword back to a ClickUp status; None means do not push."""
        for entry in self._entries:
            if entry.local == keyword:
                return entry.remote
        return None

    def vocabulary(self) -> str:
        """Return the ``#+TODO:`` keyword declaration for rendered documents."""
        active: list[str] = []
        done: list[str] = []
        for entry in self._entries:
            bucket = done if entry.done else active
            if entry.local not in active and entry.local not in done:
                bucket.append(entry.local)
        if self.default_keyword not in active and self.default_keyword not in done:
            active.insert(0, self.default_keyword)
        return " ".join(active + ["|"] + done)
