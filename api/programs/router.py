"""
Program endpoints (public browsing + admin management).
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, File, Query, UploadFile

from auth import dependencies as auth_dependencies

from . import schemas, service

router = APIRouter()
admin_router = APIRouter(prefix="/admin", dependencies=[Depends(auth_dependencies.require_admin)])

CATEGORY_PATTERN = "^(event|project|charity)$"


@router.get("/programs")
async def list_programs(
    category: str | None = Query(default=None, pattern=CATEGORY_PATTERN),
) -> dict:
    return await service.list_public_programs(category=category)


@router.get("/programs/recent")
async def recent_programs(limit: int = Query(3, ge=1, le=20)) -> dict:
    return await service.recent_programs(limit=limit)


@router.get("/programs/{program_id}")
async def get_program(program_id: int) -> dict:
    return await service.program_detail(program_id)


@router.get("/programs/{program_id}/goods-progress")
async def get_goods_progress(program_id: int) -> dict:
    return await service.public_goods_progress(program_id)


@admin_router.get("/programs")
async def admin_list_programs(
    category: str | None = Query(default=None, pattern=CATEGORY_PATTERN),
) -> dict:
    return await service.admin_list_programs(category=category)


@admin_router.get("/programs/{program_id}")
async def admin_get_program(program_id: int) -> dict:
    return await service.admin_get_program(program_id)


@admin_router.post("/programs", status_code=201)
async def create_program(request: schemas.ProgramRequest) -> dict:
    return await service.create_program(request)


@admin_router.put("/programs/{program_id}")
async def update_program(program_id: int, request: schemas.ProgramRequest) -> dict:
    return await service.update_program(program_id, request)


@admin_router.delete("/programs/{program_id}")
async def delete_program(program_id: int) -> dict:
    return await service.delete_program(program_id)


@admin_router.post("/programs/{program_id}/images/feature", status_code=201)
async def upload_feature_image(program_id: int, file: UploadFile = File(...)) -> dict:
    return await service.add_feature_image(program_id, file)


@admin_router.post("/programs/{program_id}/images/gallery", status_code=201)
async def upload_gallery_images(program_id: int, files: list[UploadFile] = File(...)) -> dict:
    return await service.add_gallery_images(program_id, files)


@admin_router.delete("/programs/{program_id}/images/{image_id}")
async def delete_program_image(program_id: int, image_id: int) -> dict:
    return await service.delete_image(program_id, image_id)


@admin_router.get("/programs/{program_id}/requirements")
async def list_requirements(program_id: int) -> dict:
    return await service.list_requirements(program_id)


@admin_router.post("/programs/{program_id}/requirements", status_code=201)
async def add_requirement(program_id: int, request: schemas.RequirementCreateRequest) -> dict:
    return await service.add_requirement(program_id, request)


@admin_router.delete("/programs/{program_id}/requirements/{requirement_id}")
async def delete_requirement(program_id: int, requirement_id: int) -> dict:
    return await service.delete_requirement(program_id, requirement_id)
