from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager
from typing import AsyncIterator


class MemberLocks:
    """One asyncio.Lock per (guild, member).

    Join and leave handling for the same member run one at a time, so a
    duplicated join event cannot create the category twice. Locks are dropped
    once nobody holds or waits on them.
    """

    def __init__(self) -> None:
        self._locks: dict[tuple[int, int], asyncio.Lock] = {}
        self._users: dict[tuple[int, int], int] = {}

    def __len__(self) -> int:
        return len(self._locks)

    @asynccontextmanager
    async def hold(self, guild_id: int, member_id: int) -> AsyncIterator[None]:
        key = (guild_id, member_id)
        lock = self._locks.setdefault(key, asyncio.Lock())
        self._users[key] = self._users.get(key, 0) + 1
        try:
            async with lock:
                yield
        finally:
            self._users[key] -= 1
            if self._users[key] == 0:
                del self._users[key]
                del self._locks[key]
