"""Pydantic schemas for badge registry endpoints."""

from typing import Optional

from pydantic import BaseModel, Field


class MintRequest(BaseModel):
    uri: str


class MintResponse(BaseModel):
    badge_id: int


class BatchMintRequest(BaseModel):
    # Size and per-entry checks happen in the registry, not here, so an
    # oversized batch reports BATCH_TOO_LARGE and bad entries are skipped.
    uris: list[str]


class BatchMintResponse(BaseModel):
    badge_ids: list[int]
    requested: int
    minted: int


class TransferRequest(BaseModel):
    sender: str = Field(..., min_length=1, max_length=255)
    recipient: str = Field(..., min_length=1, max_length=255)


class UpdateURIRequest(BaseModel):
    uri: str


class SuccessResponse(BaseModel):
    success: bool = True


class BadgeResponse(BaseModel):
    badge_id: int
    owner: Optional[str] = None
    uri: Optional[str] = None
    burned: bool = False

    model_config = {"from_attributes": True}


class URIResponse(BaseModel):
    badge_id: int
    uri: Optional[str] = None


class OwnerResponse(BaseModel):
    badge_id: int
    owner: Optional[str] = None


class BurnedResponse(BaseModel):
    badge_id: int
    burned: bool


class LastIdResponse(BaseModel):
    last_id: int


class SearchResponse(BaseModel):
    uri: str
    badge_id: Optional[int] = None
