"""Pydantic models for API request/response."""

from datetime import datetime
from typing import Any, Optional
from pydantic import BaseModel, Field


class OAuthLoginRequest(BaseModel):
    """Attributes handed over by the OAuth client after a completed handshake."""
    attributes: dict[str, Any] = Field(default_factory=dict, description="Raw user-info attributes")
    access_token: Optional[str] = Field(None, description="Provider access token")
    scopes: list[str] = Field(default_factory=list, description="Scopes granted to the access token")


class UserResponse(BaseModel):
    """Response model for the canonical local user."""
    id: str
    provider: str
    external_id: str
    username: Optional[str] = None
    display_name: Optional[str] = None
    email: Optional[str] = None
    avatar_url: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    last_login_at: Optional[datetime] = None
    display_label: Optional[str] = Field(None, description="Display name, else username")


class AuthResponse(BaseModel):
    """Response model for a completed login."""
    token: str
    user: UserResponse
    redirect_url: str = Field(..., description="Where the client should go next")
