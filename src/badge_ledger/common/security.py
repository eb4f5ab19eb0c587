"""Principal resolution for invoking callers."""

from fastapi import Header, HTTPException


async def require_principal(
    x_badge_principal: str = Header(..., alias="X-Badge-Principal"),
) -> str:
    """FastAPI dependency returning the invoking principal from the header.

    The value is used verbatim as the owner identity, so surrounding
    whitespace is rejected rather than normalized away.
    """
    principal = x_badge_principal
    if not principal or principal != principal.strip() or len(principal) > 255:
        raise HTTPException(status_code=400, detail="Invalid principal")
    return principal
