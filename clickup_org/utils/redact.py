"""Secret redaction utility — strip tokens/PII from logs."""

from __future__ import annotations

import re
from typing import Iterable, Optional

_PATTERNS: list[tuple[re.Pattern[str], str]] = [
    # ClickUp personal API tokens
    (re.compile(r"\bpk_[0-9]+_[A-Za-z0-9]{16,}\b"), "pk_[REDACTED]"),
    (re.compile(r"Authorization:\s*\S+", re.IGNORECASE), "Authorization: [REDACTED]"),
    (re.compile(r"\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b"), "[REDACTED_EMAIL]"),
]


def redact(
    text: str, extra_patterns: Optional[Iterable[tuple[re.Pattern[str], str]]] = None
) -> str:
    patterns = list(_PATTERNS)
    if extra_patterns:
        patterns.extend(extra_patterns)
    for pattern, replacement in patterns:
        text = pattern.sub(replacement, text)
    return text
