"""
Category and goods item endpoints (public lookups + admin management).
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from auth import dependencies as auth_dependencies

from . import schemas, service

router = APIRouter()
admin_router = APIRouter(prefix="/admin", dependencies=[Depends(auth_dependencies.require_admin)])


@router.get("/programs/{program_id}/categories")
async def get_program_categories(program_id: int) -> dict:
    return await service.public_categories(program_id)


@router.get("/categories/{category_id}/goods-items")
async def get_category_goods_items(category_id: int) -> dict:
    return await service.public_goods_items(category_id)


@admin_router.get("/programs/{program_id}/categories")
async def admin_program_categories(program_id: int) -> dict:
    return await service.program_categories_with_items(program_id)


@admin_router.get("/categories")
async def admin_unique_categories() -> dict:
    return await service.unique_categories()


@admin_router.post("/categories", status_code=201)
async def create_category(request: schemas.CategoryCreateRequest) -> dict:
    return await service.create_category(request)


@admin_router.delete("/categories/{category_id}")
async def delete_category(category_id: int) -> dict:
    return await service.delete_category(category_id)


@admin_router.get("/goods-items")
async def list_goods_items() -> dict:
    return await service.list_goods_items()


@admin_router.post("/goods-items", status_code=201)
async def create_goods_item(request: schemas.GoodsItemCreateRequest) -> dict:
    return await service.create_goods_item(request)


@admin_router.patch("/goods-items/{item_id}")
async def update_goods_item(item_id: int, request: schemas.GoodsItemUpdateRequest) -> dict:
    return await service.update_goods_item(item_id, request)


@admin_router.delete("/goods-items/{item_id}")
async def delete_goods_item(item_id: int) -> dict:
    return await service.delete_goods_item(item_id)
