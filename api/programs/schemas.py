"""
Pydantic schemas for program endpoints.
"""

from __future__ import annotations

import datetime as dt
from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, Field

ProgramCategory = Literal["event", "project", "charity"]
ProgramStatus = Literal["draft", "published"]


class ProgramRequest(BaseModel):
    title: str = Field(..., min_length=1, max_length=300)
    category: ProgramCategory = "event"
    description: str = Field(default="", max_length=20000)
    date: dt.date
    location: str | None = Field(default=None, max_length=300)
    # Only kept for charity programs; doubles as the funding goal.
    total_cost: Decimal | None = Field(default=None, ge=0, max_digits=14, decimal_places=2)
    status: ProgramStatus = "draft"


class RequirementCreateRequest(BaseModel):
    goods_item_id: int
    required_quantity: str = Field(..., min_length=1, max_length=100)
