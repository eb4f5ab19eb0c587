"""Shared Pydantic schemas for Badge-Ledger."""

from pydantic import BaseModel


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str = "0.1.0"
    service: str = "badge-ledger"


class ErrorResponse(BaseModel):
    error: str
    code: str
    detail: str = ""
