from __future__ import annotations

from fastapi import APIRouter

from app.schemas.proxy import HealthResponse

router = APIRouter(tags=["Health"])

SERVICE_NAME = "Roblox Gamepass Proxy API"

ENDPOINTS = {
    "gamepassDetails": "/api/gamepasses/:id/details",
    "userInventory": "/api/users/:userId/inventory/gamepasses",
    "creatorGamepasses": "/api/users/:userId/gamepasses",
}


@router.get("/", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """Service descriptor.

    Static and never rate limited, so it stays usable as a liveness probe
    even for throttled clients.
    """

    return HealthResponse(status="online", message=SERVICE_NAME, endpoints=ENDPOINTS)
