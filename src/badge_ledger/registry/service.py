"""Badge registry service — mint, transfer, update, burn and lookups."""

import functools
from dataclasses import dataclass
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from badge_ledger.common.config import BadgeSettings
from badge_ledger.common.exceptions import (
    AlreadyBurnedError,
    BadgeError,
    BadgeNotFoundError,
    BatchTooLargeError,
    InvalidURIError,
    NotOwnerError,
    URITakenError,
)
from badge_ledger.common.logging import get_logger
from badge_ledger.events.service import (
    EVENT_BURN,
    EVENT_MINT,
    EVENT_TRANSFER,
    EVENT_URI_UPDATE,
)
from badge_ledger.registry import allocator
from badge_ledger.registry.models import (
    MAX_BADGE_ID,
    BadgeOwnerModel,
    BadgeURIModel,
    BurnedBadgeModel,
    URIIndexModel,
)
from badge_ledger.registry.validator import is_valid_uri

logger = get_logger("registry")


def _in_id_range(badge_id: int) -> bool:
    return 1 <= badge_id <= MAX_BADGE_ID


def _logs_rejections(event_type: str):
    """Log a BadgeError raised by a registry mutator at WARNING, then re-raise."""

    def decorator(func):
        @functools.wraps(func)
        async def wrapper(self, session, caller, *args, **kwargs):
            try:
                return await func(self, session, caller, *args, **kwargs)
            except BadgeError as e:
                badge_id = args[0] if args and isinstance(args[0], int) else None
                logger.warning(
                    "Rejected %s: %s", event_type, e.message,
                    extra={"badge_id": badge_id, "caller": caller, "event": e.code},
                )
                raise
        return wrapper
    return decorator


@dataclass
class BadgeView:
    """Read-only snapshot of one issued badge."""
    badge_id: int
    owner: Optional[str]
    uri: Optional[str]
    burned: bool


class BadgeRegistry:
    """Core badge ledger operations.

    Every method takes the session of the current invocation. Preconditions
    are checked before the first write, and the session is rolled back by
    ``DatabaseManager.get_session`` if anything raises, so a rejected call
    never leaves partial state behind.
    """

    def __init__(self, settings: BadgeSettings, event_service=None):
        self.settings = settings
        self.event_service = event_service

    # ── Mint ──

    @_logs_rejections(EVENT_MINT)
    async def mint(self, session: AsyncSession, caller: str, uri: str) -> int:
        """Issue a new badge owned by the caller. Returns its id."""
        return await self._mint_one(session, caller, uri)

    @_logs_rejections(EVENT_MINT)
    async def batch_mint(
        self, session: AsyncSession, caller: str, uris: list[str],
    ) -> list[int]:
        """Mint one badge per URI, in order, skipping URIs that cannot be minted.

        This is a best-effort batch, not all-or-nothing: an invalid or already
        assigned URI is dropped and the remaining entries are still minted.
        The returned ids follow the input order of the entries that succeeded
        and may be shorter than ``uris``. Only an oversized batch fails as a
        whole, before anything is minted.
        """
        limit = self.settings.max_batch_size
        if len(uris) > limit:
            raise BatchTooLargeError(
                f"Batch of {len(uris)} URIs exceeds the limit of {limit}"
            )

        minted: list[int] = []
        for uri in uris:
            if len(minted) >= limit:
                break
            try:
                minted.append(await self._mint_one(session, caller, uri))
            except (InvalidURIError, URITakenError) as e:
                logger.info(
                    "Batch entry skipped: %s", e.message,
                    extra={"caller": caller, "event": EVENT_MINT},
                )

        logger.info(
            "Batch mint minted %d of %d badges", len(minted), len(uris),
            extra={"caller": caller, "event": EVENT_MINT, "count": len(minted)},
        )
        return minted

    async def _mint_one(self, session: AsyncSession, caller: str, uri: str) -> int:
        self._check_uri(uri)
        await self._check_uri_free(session, uri)

        badge_id = await allocator.peek_next_id(session)
        session.add(BadgeOwnerModel(badge_id=badge_id, owner=caller))
        session.add(BadgeURIModel(badge_id=badge_id, uri=uri))
        session.add(URIIndexModel(uri=uri, badge_id=badge_id))
        await session.flush()
        await allocator.commit_id(session, badge_id)

        await self._record(session, badge_id, EVENT_MINT, caller, {"uri": uri})
        logger.info(
            "Badge minted",
            extra={"badge_id": badge_id, "caller": caller, "event": EVENT_MINT},
        )
        return badge_id

    # ── Transfer ──

    @_logs_rejections(EVENT_TRANSFER)
    async def transfer(
        self,
        session: AsyncSession,
        caller: str,
        badge_id: int,
        sender: str,
        recipient: str,
    ) -> bool:
        """Move a badge from ``sender`` to ``recipient``.

        The recipient submits the transfer: the caller must be ``recipient``,
        and ``sender`` must be the recorded owner.
        """
        if caller != recipient:
            raise NotOwnerError("Transfer must be submitted by the recipient")
        if await self.is_burned(session, badge_id):
            raise AlreadyBurnedError(f"Badge {badge_id} is burned")
        ownership = await self._get_ownership(session, badge_id)
        if ownership is None:
            raise BadgeNotFoundError(f"Badge {badge_id} not found")
        if ownership.owner != sender:
            raise NotOwnerError(f"Badge {badge_id} is not owned by the sender")

        ownership.owner = recipient
        await session.flush()

        await self._record(
            session, badge_id, EVENT_TRANSFER, caller,
            {"from": sender, "to": recipient},
        )
        logger.info(
            "Badge transferred",
            extra={"badge_id": badge_id, "caller": caller, "event": EVENT_TRANSFER},
        )
        return True

    # ── Update URI ──

    @_logs_rejections(EVENT_URI_UPDATE)
    async def update_uri(
        self, session: AsyncSession, caller: str, badge_id: int, new_uri: str,
    ) -> bool:
        """Replace a badge's URI, keeping the reverse index in step."""
        await self._require_owner(session, caller, badge_id)
        self._check_uri(new_uri)
        await self._check_uri_free(session, new_uri, badge_id=badge_id)

        forward = await session.get(BadgeURIModel, badge_id)
        old_uri = forward.uri if forward else None

        if old_uri is not None:
            stale = await session.get(URIIndexModel, old_uri)
            if stale is not None:
                await session.delete(stale)
            # Unit of work runs deletes after inserts; flush the delete first
            await session.flush()

        if forward is None:
            session.add(BadgeURIModel(badge_id=badge_id, uri=new_uri))
        else:
            forward.uri = new_uri
        session.add(URIIndexModel(uri=new_uri, badge_id=badge_id))
        await session.flush()

        await self._record(
            session, badge_id, EVENT_URI_UPDATE, caller,
            {"old_uri": old_uri, "new_uri": new_uri},
        )
        logger.info(
            "Badge URI updated",
            extra={"badge_id": badge_id, "caller": caller, "event": EVENT_URI_UPDATE},
        )
        return True

    # ── Burn ──

    @_logs_rejections(EVENT_BURN)
    async def burn(self, session: AsyncSession, caller: str, badge_id: int) -> bool:
        """Permanently revoke a badge. The id is never reissued."""
        ownership = await self._require_owner(session, caller, badge_id)

        forward = await session.get(BadgeURIModel, badge_id)
        old_uri = forward.uri if forward else None
        if forward is not None:
            index = await session.get(URIIndexModel, forward.uri)
            if index is not None:
                await session.delete(index)
            await session.delete(forward)
        await session.delete(ownership)
        session.add(BurnedBadgeModel(badge_id=badge_id, burned=True))
        await session.flush()

        await self._record(
            session, badge_id, EVENT_BURN, caller,
            {"owner": caller, "uri": old_uri},
        )
        logger.info(
            "Badge burned",
            extra={"badge_id": badge_id, "caller": caller, "event": EVENT_BURN},
        )
        return True

    # ── Read accessors ──
    # Ids outside the storable range can never have been issued; they read
    # as absent rather than reaching the database.

    async def get_uri(self, session: AsyncSession, badge_id: int) -> str | None:
        if not _in_id_range(badge_id):
            return None
        forward = await session.get(BadgeURIModel, badge_id)
        return forward.uri if forward else None

    async def get_owner(self, session: AsyncSession, badge_id: int) -> str | None:
        ownership = await self._get_ownership(session, badge_id)
        return ownership.owner if ownership else None

    async def get_last_id(self, session: AsyncSession) -> int:
        return await allocator.get_last_id(session)

    async def is_burned(self, session: AsyncSession, badge_id: int) -> bool:
        if not _in_id_range(badge_id):
            return False
        flag = await session.get(BurnedBadgeModel, badge_id)
        return bool(flag and flag.burned)

    async def search_by_uri(self, session: AsyncSession, uri: str) -> int | None:
        index = await session.get(URIIndexModel, uri)
        return index.badge_id if index else None

    async def get_badge(self, session: AsyncSession, badge_id: int) -> BadgeView | None:
        """Aggregate view of a badge that has ever been issued."""
        if badge_id < 1 or badge_id > await self.get_last_id(session):
            return None
        return BadgeView(
            badge_id=badge_id,
            owner=await self.get_owner(session, badge_id),
            uri=await self.get_uri(session, badge_id),
            burned=await self.is_burned(session, badge_id),
        )

    # ── Helpers ──

    def _check_uri(self, uri: str) -> None:
        if not is_valid_uri(uri, self.settings.max_uri_length):
            raise InvalidURIError(
                f"URI must be ASCII and 1-{self.settings.max_uri_length} characters"
            )

    async def _check_uri_free(
        self, session: AsyncSession, uri: str, badge_id: int | None = None,
    ) -> None:
        holder = await self.search_by_uri(session, uri)
        if holder is not None and holder != badge_id:
            raise URITakenError(f"URI already assigned to badge {holder}")

    async def _get_ownership(
        self, session: AsyncSession, badge_id: int,
    ) -> BadgeOwnerModel | None:
        if not _in_id_range(badge_id):
            return None
        return await session.get(BadgeOwnerModel, badge_id)

    async def _require_owner(
        self, session: AsyncSession, caller: str, badge_id: int,
    ) -> BadgeOwnerModel:
        if await self.is_burned(session, badge_id):
            raise AlreadyBurnedError(f"Badge {badge_id} is burned")
        ownership = await self._get_ownership(session, badge_id)
        if ownership is None:
            raise BadgeNotFoundError(f"Badge {badge_id} not found")
        if ownership.owner != caller:
            raise NotOwnerError(f"Caller does not own badge {badge_id}")
        return ownership

    async def _record(
        self, session: AsyncSession, badge_id: int, event_type: str,
        actor: str, detail: dict,
    ) -> None:
        if self.event_service:
            await self.event_service.record_event(
                session, badge_id, event_type, actor, detail,
            )
