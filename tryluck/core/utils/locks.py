"""Per-user single-writer locks for whole-state operations."""

from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Dict, Iterator, List


class UserLockRegistry:
    """Hands out one lock per user id; entries vanish once nobody holds them."""

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._entries: Dict[int, List] = {}

    @contextmanager
    def hold(self, user_id: int) -> Iterator[None]:
        with self._guard:
            entry = self._entries.setdefault(user_id, [threading.Lock(), 0])
            entry[1] += 1
        try:
            with entry[0]:
                yield
        finally:
            with self._guard:
                entry[1] -= 1
                if entry[1] == 0:
                    self._entries.pop(user_id, None)

    def active_users(self) -> int:
        with self._guard:
            return len(self._entries)


user_locks = UserLockRegistry()
