"""Event log service — append and query badge lifecycle events."""

from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from badge_ledger.common.config import BadgeSettings
from badge_ledger.events.models import BadgeEventModel
from badge_ledger.registry.models import MAX_BADGE_ID

EVENT_MINT = "mint"
EVENT_TRANSFER = "transfer"
EVENT_URI_UPDATE = "uri_update"
EVENT_BURN = "burn"

EVENT_TYPES = (EVENT_MINT, EVENT_TRANSFER, EVENT_URI_UPDATE, EVENT_BURN)


class BadgeEventService:
    """Append-only history of badge state changes.

    Events are written in the same session as the change they describe, so a
    rolled-back invocation leaves no event behind. The log outlives burns and
    is where a burned badge's former owner and URI remain visible.
    """

    def __init__(self, settings: BadgeSettings):
        self.settings = settings

    # ── Write ──

    async def record_event(
        self,
        session: AsyncSession,
        badge_id: int,
        event_type: str,
        actor: str,
        detail: dict[str, Any] | None = None,
    ) -> BadgeEventModel:
        if event_type not in EVENT_TYPES:
            raise ValueError(f"Unknown badge event type: {event_type!r}")
        event = BadgeEventModel(
            badge_id=badge_id,
            event_type=event_type,
            actor=actor,
            detail=detail or {},
        )
        session.add(event)
        await session.flush()
        return event

    # ── Read ──

    async def get_events(
        self,
        session: AsyncSession,
        badge_id: int,
        event_type: str | None = None,
        limit: int | None = None,
        offset: int = 0,
    ) -> list[BadgeEventModel]:
        """Return a badge's events oldest first."""
        if not 1 <= badge_id <= MAX_BADGE_ID:
            return []
        if limit is None:
            limit = self.settings.default_page_size
        limit = max(1, min(limit, self.settings.max_page_size))

        query = select(BadgeEventModel).where(BadgeEventModel.badge_id == badge_id)
        if event_type:
            query = query.where(BadgeEventModel.event_type == event_type)
        query = query.order_by(BadgeEventModel.id.asc()).limit(limit).offset(offset)
        result = await session.execute(query)
        return list(result.scalars().all())
