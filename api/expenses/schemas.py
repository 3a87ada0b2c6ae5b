"""
Pydantic schemas for expense endpoints.
"""

from __future__ import annotations

import datetime as dt
from decimal import Decimal

from pydantic import BaseModel, Field


class ExpenseRequest(BaseModel):
    program_id: int
    description: str = Field(..., min_length=1, max_length=2000)
    amount: Decimal = Field(..., gt=0, max_digits=14, decimal_places=2)
    expense_date: dt.date
    invoice_url: str | None = Field(default=None, max_length=2000)
