"""
Admin dashboard summary.
"""

from __future__ import annotations

import asyncio

from core.formatting import money_value

from . import repository


async def summary() -> dict:
    program_count, donations, expenses = await asyncio.gather(
        repository.count_programs(),
        repository.donation_totals(),
        repository.expense_totals(),
    )
    return {
        "total_programs": program_count,
        "total_donations": int(donations["donation_count"]),
        "pending_donations": int(donations["pending_count"]),
        # Received money donations only, same rule as the public totals.
        "total_amount_raised": money_value(donations["amount_raised"]),
        "total_expenses": int(expenses["expense_count"]),
        "total_expense_amount": money_value(expenses["expense_amount"]),
    }
