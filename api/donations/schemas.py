"""
Pydantic schemas for donation endpoints.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, Field

DonationType = Literal["money", "goods"]
DonationStatus = Literal["Pending", "Received"]


class DonatedItem(BaseModel):
    goods_item_id: int
    quantity: str = Field(..., max_length=100)


class DonationRequest(BaseModel):
    donor_name: str = Field(..., max_length=200)
    donor_address: str = Field(..., max_length=500)
    donor_contact: str = Field(..., max_length=200)
    program_id: int
    category_id: int | None = None
    donation_type: DonationType = "money"
    amount: Decimal | None = Field(default=None, max_digits=14, decimal_places=2)
    items: list[DonatedItem] = Field(default_factory=list, max_length=100)


class StatusUpdateRequest(BaseModel):
    status: DonationStatus
