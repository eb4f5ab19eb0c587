"""Badge event log API router."""

from fastapi import APIRouter, Query

from badge_ledger.events.schemas import BadgeEventResponse

router = APIRouter()


def _get_service():
    from badge_ledger.deps import get_event_service
    return get_event_service()


def _get_db():
    from badge_ledger.deps import get_db
    return get_db()


@router.get("/badges/{badge_id}/events", response_model=list[BadgeEventResponse])
async def get_badge_events(
    badge_id: int,
    event_type: str | None = Query(None),
    limit: int = Query(20, ge=1, le=100),
    offset: int = Query(0, ge=0),
):
    svc = _get_service()
    db = _get_db()
    async with db.get_session() as session:
        events = await svc.get_events(
            session, badge_id, event_type=event_type,
            limit=limit, offset=offset,
        )
        return [
            BadgeEventResponse(
                id=e.id,
                badge_id=e.badge_id,
                event_type=e.event_type,
                actor=e.actor,
                detail=e.detail or {},
                created_at=e.created_at,
            )
            for e in events
        ]
