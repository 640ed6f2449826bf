"""Time-ordered identifier generation for new directory records."""

from __future__ import annotations

import threading
import uuid

import uuid6

_lock = threading.Lock()


def next_id() -> uuid.UUID:
    """Return a fresh UUIDv7; successive calls sort by creation time."""

    # uuid6 tracks the last timestamp in module state without locking.
    with _lock:
        return uuid6.uuid7()


__all__ = ["next_id"]
