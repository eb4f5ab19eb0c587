"""Tests for DatabaseManager — one serialized transaction per invocation."""

import asyncio

import pytest

from badge_ledger.common.config import BadgeSettings
from badge_ledger.common.database import DatabaseManager
from badge_ledger.common.exceptions import URITakenError
from badge_ledger.registry.service import BadgeRegistry


ALICE = "learner-alice"
BOB = "learner-bob"


async def _manager(db_url: str) -> DatabaseManager:
    manager = DatabaseManager(BadgeSettings(db_url=db_url))
    await manager.init()
    await manager.create_all()
    return manager


@pytest.fixture(params=["memory", "file"])
async def db(request, tmp_path):
    if request.param == "memory":
        url = "sqlite+aiosqlite://"
    else:
        url = f"sqlite+aiosqlite:///{tmp_path / 'badges.db'}"
    manager = await _manager(url)
    yield manager
    await manager.close()


@pytest.fixture
def registry():
    return BadgeRegistry(BadgeSettings(db_url="sqlite+aiosqlite://"))


async def _mint_in_own_invocation(db, registry, caller, uri):
    async with db.get_session() as session:
        return await registry.mint(session, caller, uri)


class TestSerializedInvocations:
    async def test_concurrent_mints_get_distinct_ids(self, db, registry):
        results = await asyncio.gather(*(
            _mint_in_own_invocation(db, registry, ALICE, f"uri-{i}")
            for i in range(5)
        ))
        assert sorted(results) == [1, 2, 3, 4, 5]
        async with db.get_session() as session:
            assert await registry.get_last_id(session) == 5
            for i in range(5):
                badge_id = await registry.search_by_uri(session, f"uri-{i}")
                assert await registry.get_owner(session, badge_id) == ALICE

    async def test_aborted_invocation_keeps_concurrent_mint(self, db, registry):
        async def aborted():
            with pytest.raises(RuntimeError):
                async with db.get_session() as session:
                    await registry.mint(session, BOB, "doomed")
                    await asyncio.sleep(0)
                    raise RuntimeError("host aborted the invocation")

        _, kept_id = await asyncio.gather(
            aborted(), _mint_in_own_invocation(db, registry, ALICE, "kept"),
        )
        async with db.get_session() as session:
            assert await registry.get_owner(session, kept_id) == ALICE
            assert await registry.search_by_uri(session, "kept") == kept_id
            assert await registry.search_by_uri(session, "doomed") is None
            assert await registry.get_last_id(session) == 1

    async def test_concurrent_mints_of_same_uri(self, db, registry):
        results = await asyncio.gather(
            *(_mint_in_own_invocation(db, registry, ALICE, "same") for _ in range(3)),
            return_exceptions=True,
        )
        assert results[0] == 1
        assert all(isinstance(r, URITakenError) for r in results[1:])


class TestSessionLifecycle:
    async def test_uninitialized_manager(self):
        manager = DatabaseManager(BadgeSettings(db_url="sqlite+aiosqlite://"))
        with pytest.raises(RuntimeError):
            async with manager.get_session():
                pass
