"""
Expense persistence (raw SQL).
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from core import db

_EXPENSE_COLUMNS = """
    e.id, e.program_id, e.description, e.amount, e.expense_date,
    e.invoice_url, e.created_at, e.updated_at
"""


async def list_expenses(*, program_id: int | None = None) -> list[dict]:
    return await db.fetch_all(
        f"""
        SELECT {_EXPENSE_COLUMNS}, p.title AS program_title
        FROM expenses e
        JOIN programs p ON p.id = e.program_id
        WHERE ($1::bigint IS NULL OR e.program_id = $1)
        ORDER BY e.expense_date DESC, e.id DESC
        """,
        program_id,
    )


async def get_expense(expense_id: int) -> dict | None:
    return await db.fetch_one(
        f"""
        SELECT {_EXPENSE_COLUMNS}, p.title AS program_title
        FROM expenses e
        JOIN programs p ON p.id = e.program_id
        WHERE e.id = $1
        """,
        expense_id,
    )


async def totals_by_program(program_ids: list[int]) -> dict[int, Decimal]:
    if not program_ids:
        return {}
    rows = await db.fetch_all(
        """
        SELECT program_id, COALESCE(sum(amount), 0) AS total
        FROM expenses
        WHERE program_id = ANY($1::bigint[])
        GROUP BY program_id
        """,
        program_ids,
    )
    return {int(r["program_id"]): r["total"] for r in rows}


async def insert_expense(
    *,
    program_id: int,
    description: str,
    amount: Decimal,
    expense_date: date,
    invoice_url: str | None,
) -> dict:
    row = await db.fetch_one(
        """
        INSERT INTO expenses (program_id, description, amount, expense_date, invoice_url)
        VALUES ($1, $2, $3, $4, $5)
        RETURNING id, program_id, description, amount, expense_date, invoice_url, created_at, updated_at
        """,
        program_id,
        description,
        amount,
        expense_date,
        invoice_url,
    )
    if row is None:
        raise RuntimeError("Failed to insert expense.")
    return row


async def update_expense(
    expense_id: int,
    *,
    program_id: int,
    description: str,
    amount: Decimal,
    expense_date: date,
    invoice_url: str | None,
) -> dict | None:
    return await db.fetch_one(
        """
        UPDATE expenses
        SET program_id = $2,
            description = $3,
            amount = $4,
            expense_date = $5,
            invoice_url = $6,
            updated_at = now()
        WHERE id = $1
        RETURNING id, program_id, description, amount, expense_date, invoice_url, created_at, updated_at
        """,
        expense_id,
        program_id,
        description,
        amount,
        expense_date,
        invoice_url,
    )


async def delete_expense(expense_id: int) -> bool:
    status = await db.execute("DELETE FROM expenses WHERE id = $1", expense_id)
    return db.affected_rows(status) > 0
