from __future__ import annotations

from app.api.routes.gamepasses import router as gamepasses_router
from app.api.routes.health import router as health_router

__all__ = ["gamepasses_router", "health_router"]
