from typing import Any

from fastapi import APIRouter, Depends, Query, Request

from app.core.rate_limit import enforce_rate_limit
from app.schemas.proxy import ErrorResponse
from app.services.proxy_service import GamepassProxyService, build_proxy_request

router = APIRouter(
    prefix="/api",
    tags=["Gamepasses"],
    dependencies=[Depends(enforce_rate_limit)],
    responses={
        429: {"model": ErrorResponse, "description": "Rate limit exceeded"},
        500: {"model": ErrorResponse, "description": "Upstream unreachable"},
    },
)


def get_proxy_service(request: Request) -> GamepassProxyService:
    return request.app.state.proxy_service


@router.get("/gamepasses/{gamepass_id}/details")
async def gamepass_details(
    gamepass_id: str,
    service: GamepassProxyService = Depends(get_proxy_service),
) -> Any:
    """Relay the upstream details document of one game pass."""
    return await service.gamepass_details(gamepass_id)


@router.get("/users/{user_id}/inventory/gamepasses")
async def user_inventory_gamepasses(
    user_id: str,
    cursor: str | None = Query(None, description="Pagination cursor from a previous page"),
    limit: str | None = Query(None, description="Page size (default 50, max 100)"),
    page: str | None = Query(None, description="Accepted for compatibility; ignored"),
    service: GamepassProxyService = Depends(get_proxy_service),
) -> Any:
    """Relay the game passes owned by a user."""
    proxy_request = build_proxy_request(user_id, cursor=cursor, limit=limit, page=page)
    return await service.user_inventory(proxy_request)


@router.get("/users/{user_id}/gamepasses")
async def creator_gamepasses(
    user_id: str,
    cursor: str | None = Query(None, description="Pagination cursor from a previous page"),
    limit: str | None = Query(None, description="Page size (default 50, max 100)"),
    service: GamepassProxyService = Depends(get_proxy_service),
) -> Any:
    """Relay the non-archived game passes created by a user."""
    proxy_request = build_proxy_request(user_id, cursor=cursor, limit=limit)
    return await service.creator_gamepasses(proxy_request)
