"""
Donation endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from auth import dependencies as auth_dependencies

from . import schemas, service

router = APIRouter()
admin_router = APIRouter(prefix="/admin", dependencies=[Depends(auth_dependencies.require_admin)])


@router.post("/donations", status_code=201)
async def submit_donation(request: schemas.DonationRequest) -> dict:
    """
    Public donation form. Donations start as Pending and only count toward
    totals once an admin marks them Received.
    """
    return await service.submit_donation(request)


@router.get("/donations/history")
async def donation_history() -> dict:
    return await service.donation_history()


@admin_router.get("/donations")
async def admin_list_donations(
    status: str | None = Query(default=None, pattern="^(Pending|Received)$"),
) -> dict:
    return await service.admin_list_donations(status=status)


@admin_router.patch("/donations/{donation_id}/status")
async def update_donation_status(donation_id: int, request: schemas.StatusUpdateRequest) -> dict:
    return await service.update_status(donation_id, request)
