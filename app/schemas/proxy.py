"""Pydantic schemas for proxy requests and the health descriptor."""

from __future__ import annotations

from pydantic import BaseModel, Field


class ProxyRequest(BaseModel):
    """Normalized inputs of one proxied call (lives for a single request)."""

    target_id: str = Field(
        ..., description="Game pass id or user id taken from the path."
    )
    cursor: str = Field(
        default="",
        description="Opaque pagination cursor forwarded upstream (empty for the first page).",
    )
    limit: int = Field(
        default=50,
        description="Page size forwarded upstream, already defaulted and clamped.",
    )
    page: str | None = Field(
        default=None,
        description="Accepted on the inventory route for compatibility; never forwarded.",
    )


class HealthResponse(BaseModel):
    """Static service descriptor returned by ``GET /``."""

    status: str = Field(..., description="Service status, always 'online'.")
    message: str = Field(..., description="Human-readable service name.")
    endpoints: dict[str, str] = Field(
        ..., description="Route names mapped to their path templates."
    )


class ErrorResponse(BaseModel):
    """Error body shared by rate-limit, upstream and unexpected failures."""

    error: str = Field(..., description="Fixed error category.")
    message: str | None = Field(
        default=None, description="Underlying failure description."
    )
    request_id: str | None = Field(
        default=None, description="Correlation id of the failed request."
    )
