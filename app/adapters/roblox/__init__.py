"""Roblox API adapter layer - the only code that talks to the upstream."""

from app.adapters.roblox.base import AbstractGamepassAPI
from app.adapters.roblox.factory import create_roblox_client
from app.adapters.roblox.httpx_client import RobloxAPIClient

__all__ = [
    "AbstractGamepassAPI",
    "RobloxAPIClient",
    "create_roblox_client",
]
