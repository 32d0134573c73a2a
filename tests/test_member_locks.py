from __future__ import annotations

import asyncio

from concierge.services.member_locks import MemberLocks


class TestMemberLocks:
    async def test_same_member_is_serialized(self):
        locks = MemberLocks()
        events: list[str] = []

        async def worker(tag: str) -> None:
            async with locks.hold(1, 42):
                events.append(f"{tag}:start")
                await asyncio.sleep(0.01)
                events.append(f"{tag}:end")

        await asyncio.gather(worker("a"), worker("b"))

        assert events == ["a:start", "a:end", "b:start", "b:end"]
        assert len(locks) == 0

    async def test_different_members_interleave(self):
        locks = MemberLocks()
        events: list[str] = []

        async def worker(member_id: int) -> None:
            async with locks.hold(1, member_id):
                events.append(f"{member_id}:start")
                await asyncio.sleep(0.01)
                events.append(f"{member_id}:end")

        await asyncio.gather(worker(1), worker(2))

        assert events[:2] == ["1:start", "2:start"]

    async def test_lock_released_on_error(self):
        locks = MemberLocks()
        try:
            async with locks.hold(1, 42):
                raise ValueError("boom")
        except ValueError:
            pass

        assert len(locks) == 0
        async with locks.hold(1, 42):
            assert len(locks) == 1
