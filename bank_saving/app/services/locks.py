from __future__ import annotations

import threading
from collections.abc import Iterator
from contextlib import contextmanager
from uuid import UUID


class _AccountLock:
    __slots__ = ("lock", "holders")

    def __init__(self) -> None:
        self.lock = threading.Lock()
        # Threads holding or waiting for ``lock``.
        self.holders = 0


class AccountLockRegistry:
    """One mutex per account id, shared by every request in the process.

    Balance mutations hold the account's lock across the whole
    read-compute-write sequence. An entry lives only while some thread holds
    or waits for it, so unknown account ids leave nothing behind. Writers in
    other processes are caught by the version check in
    ``BankRepository.update_account_balance``.
    """

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._locks: dict[UUID, _AccountLock] = {}

    def __len__(self) -> int:
        with self._guard:
            return len(self._locks)

    def __contains__(self, account_id: object) -> bool:
        with self._guard:
            return account_id in self._locks

    @contextmanager
    def hold(self, account_id: UUID) -> Iterator[None]:
        with self._guard:
            entry = self._locks.get(account_id)
            if entry is None:
                entry = self._locks[account_id] = _AccountLock()
            entry.holders += 1
        try:
            with entry.lock:
                yield
        finally:
            with self._guard:
                entry.holders -= 1
                if entry.holders == 0:
                    del self._locks[account_id]
