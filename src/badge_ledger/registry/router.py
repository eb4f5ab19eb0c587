"""Badge registry API router."""

from fastapi import APIRouter, Depends, HTTPException, Query

from badge_ledger.common.exceptions import BadgeError, BadgeNotFoundError
from badge_ledger.common.schemas import ErrorResponse
from badge_ledger.common.security import require_principal
from badge_ledger.registry.schemas import (
    BadgeResponse,
    BatchMintRequest,
    BatchMintResponse,
    BurnedResponse,
    LastIdResponse,
    MintRequest,
    MintResponse,
    OwnerResponse,
    SearchResponse,
    SuccessResponse,
    TransferRequest,
    UpdateURIRequest,
    URIResponse,
)

router = APIRouter()

_STATUS_BY_CODE = {
    "NOT_OWNER": 403,
    "NOT_FOUND": 404,
    "INVALID_URI": 422,
    "ALREADY_BURNED": 409,
    "URI_TAKEN": 409,
    "BATCH_TOO_LARGE": 413,
}


def _get_service():
    from badge_ledger.deps import get_registry
    return get_registry()


def _get_db():
    from badge_ledger.deps import get_db
    return get_db()


def _http_error(e: BadgeError) -> HTTPException:
    body = ErrorResponse(error=type(e).__name__, code=e.code, detail=e.message)
    return HTTPException(
        status_code=_STATUS_BY_CODE.get(e.code, 400), detail=body.model_dump()
    )


# ── Mutations ──

@router.post("/badges", response_model=MintResponse, status_code=201)
async def mint_badge(body: MintRequest, caller: str = Depends(require_principal)):
    svc = _get_service()
    db = _get_db()
    try:
        async with db.get_session() as session:
            badge_id = await svc.mint(session, caller, body.uri)
    except BadgeError as e:
        raise _http_error(e)
    return MintResponse(badge_id=badge_id)


@router.post("/badges/batch", response_model=BatchMintResponse, status_code=201)
async def batch_mint_badges(
    body: BatchMintRequest, caller: str = Depends(require_principal),
):
    svc = _get_service()
    db = _get_db()
    try:
        async with db.get_session() as session:
            badge_ids = await svc.batch_mint(session, caller, body.uris)
    except BadgeError as e:
        raise _http_error(e)
    return BatchMintResponse(
        badge_ids=badge_ids, requested=len(body.uris), minted=len(badge_ids),
    )


@router.post("/badges/{badge_id}/transfer", response_model=SuccessResponse)
async def transfer_badge(
    badge_id: int, body: TransferRequest, caller: str = Depends(require_principal),
):
    svc = _get_service()
    db = _get_db()
    try:
        async with db.get_session() as session:
            await svc.transfer(session, caller, badge_id, body.sender, body.recipient)
    except BadgeError as e:
        raise _http_error(e)
    return SuccessResponse()


@router.put("/badges/{badge_id}/uri", response_model=SuccessResponse)
async def update_badge_uri(
    badge_id: int, body: UpdateURIRequest, caller: str = Depends(require_principal),
):
    svc = _get_service()
    db = _get_db()
    try:
        async with db.get_session() as session:
            await svc.update_uri(session, caller, badge_id, body.uri)
    except BadgeError as e:
        raise _http_error(e)
    return SuccessResponse()


@router.delete("/badges/{badge_id}", response_model=SuccessResponse)
async def burn_badge(badge_id: int, caller: str = Depends(require_principal)):
    svc = _get_service()
    db = _get_db()
    try:
        async with db.get_session() as session:
            await svc.burn(session, caller, badge_id)
    except BadgeError as e:
        raise _http_error(e)
    return SuccessResponse()


# ── Lookups ──

@router.get("/badges/last-id", response_model=LastIdResponse)
async def get_last_badge_id():
    svc = _get_service()
    db = _get_db()
    async with db.get_session() as session:
        return LastIdResponse(last_id=await svc.get_last_id(session))


@router.get("/badges/search", response_model=SearchResponse)
async def search_badge_by_uri(uri: str = Query(...)):
    svc = _get_service()
    db = _get_db()
    async with db.get_session() as session:
        return SearchResponse(uri=uri, badge_id=await svc.search_by_uri(session, uri))


@router.get("/badges/{badge_id}", response_model=BadgeResponse)
async def get_badge(badge_id: int):
    svc = _get_service()
    db = _get_db()
    async with db.get_session() as session:
        badge = await svc.get_badge(session, badge_id)
        if badge is None:
            raise _http_error(BadgeNotFoundError(f"Badge {badge_id} not found"))
        return BadgeResponse.model_validate(badge)


@router.get("/badges/{badge_id}/uri", response_model=URIResponse)
async def get_badge_uri(badge_id: int):
    svc = _get_service()
    db = _get_db()
    async with db.get_session() as session:
        return URIResponse(badge_id=badge_id, uri=await svc.get_uri(session, badge_id))


@router.get("/badges/{badge_id}/owner", response_model=OwnerResponse)
async def get_badge_owner(badge_id: int):
    svc = _get_service()
    db = _get_db()
    async with db.get_session() as session:
        return OwnerResponse(
            badge_id=badge_id, owner=await svc.get_owner(session, badge_id),
        )


@router.get("/badges/{badge_id}/burned", response_model=BurnedResponse)
async def get_badge_burned(badge_id: int):
    svc = _get_service()
    db = _get_db()
    async with db.get_session() as session:
        return BurnedResponse(
            badge_id=badge_id, burned=await svc.is_burned(session, badge_id),
        )
