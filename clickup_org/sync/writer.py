"""Write rendered entries into an Org document, replacing prior content."""

from __future__ import annotations

import logging
import os
import stat
import tempfile
from datetime import datetime
from pathlib import Path
from typing import Callable, Iterable, Optional

from clickup_org.sync.status_mapper import StatusTable

logger = logging.getLogger(__name__)


def _default_file_mode() -> int:
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


DEFAULT_FILE_MODE = _default_file_mode()


class DocumentWriter:
    """Atomically regenerates one document per list mapping."""

    def __init__(
        self,
        status_table: StatusTable,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.status_table = status_table
        self._clock = clock

    def header(self, list_id: str, title: Optional[str] = None) -> str:
        synced_at = self._clock().strftime("%Y-%m-%d %H:%M:%S")
        return (
            f"#+TITLE: {title or f'ClickUp list {list_id}'}\n"
            f"#+CLICKUP_LIST: {list_id}\n"
            f"#+LAST_SYNC: {synced_at}\n"
            f"#+TODO: {self.status_table.vocabulary()}\n"
            "\n"
        )

    def compose(self, list_id: str, entries: Iterable[str], title: Optional[str] = None) -> str:
        return self.header(list_id, title) + "".join(entries)

    def write(
        self,
        list_id: str,
        path: Path,
        entries: Iterable[str],
        title: Optional[str] = None,
    ) -> bool:
        """Replace ``path`` with the rendered document. Returns False on I/O or encoding failure."""
        content = self.compose(list_id, entries, title)
        path = Path(path)
        tmp_name: Optional[str] = None
        try:
            data = content.encode("utf-8")
            path.parent.mkdir(parents=True, exist_ok=True)
            mode = stat.S_IMODE(path.stat().st_mode) if path.exists() else DEFAULT_FILE_MODE
            fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", dir=path.parent)
            with os.fdopen(fd, "wb") as f:
                f.write(data)
            os.chmod(tmp_name, mode)
            os.replace(tmp_name, path)
            tmp_name = None
        except (OSError, UnicodeError) as e:
            logger.error(f"Failed to write {path} for list {list_id}: {e}")
            return False
        finally:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)

        logger.info(f"Wrote {path} for list {list_id}")
        return True
