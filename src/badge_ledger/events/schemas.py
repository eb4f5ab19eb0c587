"""Pydantic schemas for badge event log responses."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel


class BadgeEventResponse(BaseModel):
    id: int
    badge_id: int
    event_type: str
    actor: str
    detail: dict[str, Any] = {}
    created_at: datetime

    model_config = {"from_attributes": True}
