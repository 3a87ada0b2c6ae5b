"""
Team endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, File, Query, UploadFile

from auth import dependencies as auth_dependencies

from . import schemas, service

router = APIRouter()
admin_router = APIRouter(prefix="/admin", dependencies=[Depends(auth_dependencies.require_admin)])


@router.get("/team")
async def get_team(year: str | None = Query(default=None, max_length=20)) -> dict:
    return await service.org_chart(year=year)


@router.get("/team/positions")
async def get_positions() -> dict:
    return service.positions()


@admin_router.get("/team")
async def admin_list_members() -> dict:
    return await service.list_members()


@admin_router.post("/team", status_code=201)
async def create_member(request: schemas.TeamMemberRequest) -> dict:
    return await service.create_member(request)


@admin_router.put("/team/{member_id}")
async def update_member(member_id: int, request: schemas.TeamMemberRequest) -> dict:
    return await service.update_member(member_id, request)


@admin_router.delete("/team/{member_id}")
async def delete_member(member_id: int) -> dict:
    return await service.delete_member(member_id)


@admin_router.post("/team/photos", status_code=201)
async def upload_photo(file: UploadFile = File(...)) -> dict:
    """
    Upload a photo and get back its public URL for the member form.
    """
    return await service.upload_photo(file)
