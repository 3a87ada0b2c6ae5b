"""
Expense service.
"""

from __future__ import annotations

import logging
from decimal import Decimal

import asyncpg
from fastapi import HTTPException

from core.formatting import format_currency, format_date, money_value
from programs import repository as program_repository

from . import repository, schemas

logger = logging.getLogger(__name__)


def _total(rows: list[dict]) -> Decimal:
    return sum((Decimal(str(r.get("amount") or 0)) for r in rows), Decimal("0"))


async def public_expenses(*, program_id: int | None = None) -> dict:
    rows = await repository.list_expenses(program_id=program_id)
    for row in rows:
        row["formatted_amount"] = format_currency(row["amount"])
        row["formatted_date"] = format_date(row["expense_date"])

    total = _total(rows)
    return {
        "expenses": rows,
        "count": len(rows),
        "total_amount": money_value(total),
        "formatted_total_amount": format_currency(total),
    }


async def filter_programs(*, published_only: bool = True) -> dict:
    rows = await program_repository.list_charity_programs(published_only=published_only)
    return {"programs": rows, "count": len(rows)}


async def get_expense(expense_id: int) -> dict:
    row = await repository.get_expense(expense_id)
    if row is None:
        raise HTTPException(status_code=404, detail="Expense not found.")
    return row


async def _expense_fields(payload: schemas.ExpenseRequest) -> dict:
    description = payload.description.strip()
    if not description:
        raise HTTPException(status_code=422, detail="Description is required.")

    program = await program_repository.get_program(payload.program_id)
    if program is None:
        raise HTTPException(status_code=404, detail="Program not found.")

    return {
        "program_id": payload.program_id,
        "description": description,
        "amount": payload.amount,
        "expense_date": payload.expense_date,
        "invoice_url": (payload.invoice_url or "").strip() or None,
    }


async def create_expense(payload: schemas.ExpenseRequest) -> dict:
    fields = await _expense_fields(payload)
    try:
        row = await repository.insert_expense(**fields)
    except asyncpg.ForeignKeyViolationError as exc:
        raise HTTPException(status_code=409, detail="Program no longer exists.") from exc
    logger.info("Created expense %s for program %s", row["id"], row["program_id"])
    return row


async def update_expense(expense_id: int, payload: schemas.ExpenseRequest) -> dict:
    fields = await _expense_fields(payload)
    try:
        row = await repository.update_expense(expense_id, **fields)
    except asyncpg.ForeignKeyViolationError as exc:
        raise HTTPException(status_code=409, detail="Program no longer exists.") from exc
    if row is None:
        raise HTTPException(status_code=404, detail="Expense not found.")
    logger.info("Updated expense %s", expense_id)
    return row


async def delete_expense(expense_id: int) -> dict:
    if not await repository.delete_expense(expense_id):
        raise HTTPException(status_code=404, detail="Expense not found.")
    logger.info("Deleted expense %s", expense_id)
    return {"ok": True, "expense_id": expense_id}
