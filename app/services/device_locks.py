# app/services/device_locks.py
"""
Per-device mutual exclusion for firmware writes.

Uploads and deletes for one device read the slot pair, decide, then write. Two
of those interleaving could install two "current" records, so they run one at a
time per device. Different devices never wait on each other.
"""
import asyncio
from collections import defaultdict
from contextlib import asynccontextmanager
from typing import Dict


class DeviceLockRegistry:
    """Hands out one asyncio.Lock per device id, dropped once nobody needs it."""

    def __init__(self):
        self._locks: Dict[str, asyncio.Lock] = {}
        self._users: Dict[str, int] = defaultdict(int)

    @asynccontextmanager
    async def hold(self, device_id: str):
        lock = self._locks.get(device_id)
        if lock is None:
            lock = self._locks[device_id] = asyncio.Lock()
        self._users[device_id] += 1
        try:
            async with lock:
                yield
        finally:
            self._users[device_id] -= 1
            if self._users[device_id] == 0:
                del self._users[device_id]
                del self._locks[device_id]

    def is_held(self, device_id: str) -> bool:
        lock = self._locks.get(device_id)
        return lock is not None and lock.locked()

    def __len__(self):
        return len(self._locks)


# Shared by every request handled in this process
device_locks = DeviceLockRegistry()
