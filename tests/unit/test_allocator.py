"""Tests for registry.allocator — counter peek and commit."""

import pytest

from badge_ledger.common.config import BadgeSettings
from badge_ledger.common.database import DatabaseManager
from badge_ledger.registry import allocator


@pytest.fixture
async def db():
    manager = DatabaseManager(BadgeSettings(db_url="sqlite+aiosqlite://"))
    await manager.init()
    await manager.create_all()
    yield manager
    await manager.close()


class TestAllocator:
    async def test_starts_at_zero(self, db):
        async with db.get_session() as session:
            assert await allocator.get_last_id(session) == 0
            assert await allocator.peek_next_id(session) == 1

    async def test_peek_does_not_advance(self, db):
        async with db.get_session() as session:
            await allocator.peek_next_id(session)
            await allocator.peek_next_id(session)
            assert await allocator.get_last_id(session) == 0

    async def test_commit_advances(self, db):
        async with db.get_session() as session:
            await allocator.commit_id(session, 1)
            await allocator.commit_id(session, 2)
        async with db.get_session() as session:
            assert await allocator.get_last_id(session) == 2
            assert await allocator.peek_next_id(session) == 3

    async def test_commit_out_of_sequence_rejected(self, db):
        async with db.get_session() as session:
            with pytest.raises(RuntimeError):
                await allocator.commit_id(session, 5)

    async def test_commit_rolled_back_with_session(self, db):
        with pytest.raises(ValueError):
            async with db.get_session() as session:
                await allocator.commit_id(session, 1)
                raise ValueError("abort")
        async with db.get_session() as session:
            assert await allocator.get_last_id(session) == 0
