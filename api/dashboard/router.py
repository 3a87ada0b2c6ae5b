"""
Admin dashboard endpoint.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from auth import dependencies as auth_dependencies

from . import service

admin_router = APIRouter(prefix="/admin", dependencies=[Depends(auth_dependencies.require_admin)])


@admin_router.get("/dashboard")
async def dashboard() -> dict:
    return await service.summary()
