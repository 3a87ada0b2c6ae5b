"""
Pydantic schemas for category and goods item endpoints.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class CategoryCreateRequest(BaseModel):
    program_id: int
    name: str = Field(..., min_length=1, max_length=200)


class GoodsItemCreateRequest(BaseModel):
    category_id: int
    name: str = Field(..., min_length=1, max_length=200)
    required_quantity: str | None = Field(default=None, max_length=100)


class GoodsItemUpdateRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    required_quantity: str | None = Field(default=None, max_length=100)
