from __future__ import annotations

import logging
import threading
from typing import Any, Callable

logger = logging.getLogger(__name__)

PROJECTS = "projects"
ISSUE_TYPES = "issue_types"
ASSIGNABLE_USERS = "assignable_users"


class ReferenceCache:
    """Memoized low-churn lookups, cleared only as a whole."""

    def __init__(self) -> None:
        self._slots: dict[tuple[str, str | None], Any] = {}
        self._lock = threading.RLock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._slots)

    def __contains__(self, slot: tuple[str, str | None]) -> bool:
        with self._lock:
            return slot in self._slots

    def get_or_fetch(self, name: str, fetch: Callable[[], Any], key: str | None = None) -> Any:
        slot = (name, key)
        with self._lock:
            if slot in self._slots:
                return self._slots[slot]
            value = fetch()
            self._slots[slot] = value
            logger.debug("Cached %s%s", name, f" for {key}" if key else "")
            return value

    def clear(self) -> None:
        with self._lock:
            self._slots.clear()
