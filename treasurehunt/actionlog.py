"""Appending timestamped action entries to a hunt's log file."""

from __future__ import annotations

import os
from datetime import datetime
from pathlib import Path

_ENTRY_LIMIT = 255
_LOG_MODE = 0o644


def format_entry(action: str, when: datetime) -> str:
    """Build one log line for ``action`` performed at ``when``.

    Entries longer than the log line limit are cut, losing the newline.
    """
    entry = f"USED ACTION: {action} at {when:[%Y-%m-%d %H:%M:%S]}\n"
    return entry[:_ENTRY_LIMIT]


def log_action(
    action: str, path: str | Path, now: datetime | None = None
) -> str:
    """Append an entry for ``action`` to the log at ``path`` and return it."""
    entry = format_entry(action, datetime.now() if now is None else now)
    fd = os.open(path, os.O_CREAT | os.O_APPEND | os.O_WRONLY, _LOG_MODE)
    with os.fdopen(fd, "w", encoding="utf-8") as log:
        log.write(entry)
    return entry