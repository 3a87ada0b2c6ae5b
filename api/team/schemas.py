"""
Pydantic schemas for team endpoints.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from core.settings import DEFAULT_TEAM_YEAR


class TeamMemberRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    position: str = Field(..., min_length=1, max_length=100)
    year: str = Field(default=DEFAULT_TEAM_YEAR, min_length=1, max_length=20)
    display_order: int = Field(default=0, ge=0)
    image_url: str | None = Field(default=None, max_length=2000)
