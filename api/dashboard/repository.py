"""
Dashboard aggregates (raw SQL).
"""

from __future__ import annotations

from decimal import Decimal

from core import db


async def count_programs() -> int:
    return int(await db.fetch_value("SELECT count(*) FROM programs") or 0)


async def donation_totals() -> dict:
    row = await db.fetch_one(
        """
        SELECT count(*) AS donation_count,
               count(*) FILTER (WHERE status = 'Pending') AS pending_count,
               COALESCE(sum(amount) FILTER (
                 WHERE donation_type = 'money' AND status = 'Received'
               ), 0) AS amount_raised
        FROM donations
        """
    )
    return row or {"donation_count": 0, "pending_count": 0, "amount_raised": Decimal("0")}


async def expense_totals() -> dict:
    row = await db.fetch_one(
        """
        SELECT count(*) AS expense_count,
               COALESCE(sum(amount), 0) AS expense_amount
        FROM expenses
        """
    )
    return row or {"expense_count": 0, "expense_amount": Decimal("0")}
