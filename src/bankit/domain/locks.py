"""Per-account mutual exclusion."""

import threading
from contextlib import contextmanager
from typing import Iterator


class AccountLockRegistry:
    """Hands out one re-entrant lock per account country ID.

    Shared by every service that reads-then-writes an account, so balance
    mutations and failed-login counting on the same account are serialized
    within the process. A lock lives only while some thread holds or waits
    on it.
    """

    def __init__(self) -> None:
        self._guard = threading.Lock()
        # country_id -> [lock, number of threads holding or waiting]
        self._locks: dict[str, list] = {}

    def __len__(self) -> int:
        with self._guard:
            return len(self._locks)

    def _checkout(self, country_ids: list[str]) -> list[threading.RLock]:
        with self._guard:
            locks = []
            for country_id in country_ids:
                entry = self._locks.setdefault(country_id, [threading.RLock(), 0])
                entry[1] += 1
                locks.append(entry[0])
            return locks

    def _checkin(self, country_ids: list[str]) -> None:
        with self._guard:
            for country_id in country_ids:
                entry = self._locks[country_id]
                entry[1] -= 1
                if entry[1] == 0:
                    del self._locks[country_id]

    @contextmanager
    def hold(self, *country_ids: str) -> Iterator[None]:
        """Hold the locks of all given accounts.

        Locks are taken in sorted order so two transfers in opposite
        directions cannot deadlock.
        """
        ordered = sorted(set(country_ids))
        locks = self._checkout(ordered)
        acquired = []
        try:
            for lock in locks:
                lock.acquire()
                acquired.append(lock)
            yield
        finally:
            for lock in reversed(acquired):
                lock.release()
            self._checkin(ordered)
