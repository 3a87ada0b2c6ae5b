"""
Expense endpoints (public transparency listing + admin management).
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from auth import dependencies as auth_dependencies

from . import schemas, service

router = APIRouter()
admin_router = APIRouter(prefix="/admin", dependencies=[Depends(auth_dependencies.require_admin)])


@router.get("/expenses")
async def list_expenses(program_id: int | None = Query(default=None, ge=1)) -> dict:
    return await service.public_expenses(program_id=program_id)


@router.get("/expenses/programs")
async def expense_programs() -> dict:
    return await service.filter_programs(published_only=True)


@admin_router.get("/expenses")
async def admin_list_expenses() -> dict:
    return await service.public_expenses()


@admin_router.get("/expenses/programs")
async def admin_expense_programs() -> dict:
    return await service.filter_programs(published_only=False)


@admin_router.get("/expenses/{expense_id}")
async def get_expense(expense_id: int) -> dict:
    return await service.get_expense(expense_id)


@admin_router.post("/expenses", status_code=201)
async def create_expense(request: schemas.ExpenseRequest) -> dict:
    return await service.create_expense(request)


@admin_router.put("/expenses/{expense_id}")
async def update_expense(expense_id: int, request: schemas.ExpenseRequest) -> dict:
    return await service.update_expense(expense_id, request)


@admin_router.delete("/expenses/{expense_id}")
async def delete_expense(expense_id: int) -> dict:
    return await service.delete_expense(expense_id)
