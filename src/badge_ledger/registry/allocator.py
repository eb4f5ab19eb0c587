"""Badge identifier allocation backed by the registry counter row."""

from sqlalchemy.ext.asyncio import AsyncSession

from badge_ledger.registry.models import LAST_BADGE_ID, RegistryCounterModel


async def get_last_id(session: AsyncSession) -> int:
    """Return the last issued badge id, 0 before the first mint."""
    counter = await session.get(RegistryCounterModel, LAST_BADGE_ID)
    return counter.value if counter else 0


async def peek_next_id(session: AsyncSession) -> int:
    """Return the id the next successful mint will consume. Writes nothing."""
    return await get_last_id(session) + 1


async def commit_id(session: AsyncSession, badge_id: int) -> None:
    """Advance the counter to a consumed id.

    Called only once the mint that used ``badge_id`` has written all of its
    rows, so a rejected mint never moves the counter.
    """
    counter = await session.get(RegistryCounterModel, LAST_BADGE_ID)
    if counter is None:
        counter = RegistryCounterModel(name=LAST_BADGE_ID, value=0)
        session.add(counter)
    if badge_id != counter.value + 1:
        raise RuntimeError(
            f"Badge id {badge_id} does not follow last issued id {counter.value}"
        )
    counter.value = badge_id
    await session.flush()
