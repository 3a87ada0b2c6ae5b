"""
Catalog service: donation categories and the goods items donors can give.
"""

from __future__ import annotations

import logging

from fastapi import HTTPException

from programs import repository as program_repository

from . import repository, schemas

logger = logging.getLogger(__name__)


def _clean(value: str | None, *, field: str) -> str:
    cleaned = (value or "").strip()
    if not cleaned:
        raise HTTPException(status_code=422, detail=f"{field} is required.")
    return cleaned


def _clean_optional(value: str | None) -> str | None:
    cleaned = (value or "").strip()
    return cleaned or None


async def _require_program(program_id: int) -> dict:
    program = await program_repository.get_program(program_id)
    if program is None:
        raise HTTPException(status_code=404, detail="Program not found.")
    return program


async def _require_category(category_id: int) -> dict:
    category = await repository.get_category(category_id)
    if category is None:
        raise HTTPException(status_code=404, detail="Category not found.")
    return category


async def public_categories(program_id: int) -> dict:
    program = await program_repository.get_program(program_id)
    if program is None or program["status"] != "published":
        raise HTTPException(status_code=404, detail="Program not found.")
    rows = await repository.list_categories(program_id)
    return {"categories": rows, "count": len(rows)}


async def public_goods_items(category_id: int) -> dict:
    await _require_category(category_id)
    rows = await repository.list_goods_items(category_id)
    return {"items": rows, "count": len(rows)}


async def program_categories_with_items(program_id: int) -> dict:
    """
    Admin view: every category of a program with its goods items.
    """
    await _require_program(program_id)
    categories = await repository.list_categories(program_id)
    for category in categories:
        category["goods_items"] = await repository.list_goods_items(int(category["id"]))
    return {"categories": categories, "count": len(categories)}


async def unique_categories() -> dict:
    """
    Category picker for the goods catalog: first category per distinct name.
    """
    seen: dict[str, dict] = {}
    for row in await repository.list_all_categories():
        seen.setdefault(row["name"], {"id": row["id"], "name": row["name"]})
    categories = list(seen.values())
    return {"categories": categories, "count": len(categories)}


async def create_category(payload: schemas.CategoryCreateRequest) -> dict:
    name = _clean(payload.name, field="Category name")
    await _require_program(payload.program_id)
    row = await repository.insert_category(program_id=payload.program_id, name=name)
    logger.info("Created donation category %s for program %s", row["id"], payload.program_id)
    return row


async def delete_category(category_id: int) -> dict:
    if not await repository.delete_category(category_id):
        raise HTTPException(status_code=404, detail="Category not found.")
    logger.info("Deleted donation category %s", category_id)
    return {"ok": True, "category_id": category_id}


async def list_goods_items() -> dict:
    rows = await repository.list_all_goods_items()
    return {"items": rows, "count": len(rows)}


async def create_goods_item(payload: schemas.GoodsItemCreateRequest) -> dict:
    name = _clean(payload.name, field="Item name")
    await _require_category(payload.category_id)
    row = await repository.insert_goods_item(
        category_id=payload.category_id,
        name=name,
        required_quantity=_clean_optional(payload.required_quantity),
    )
    logger.info("Created goods item %s in category %s", row["id"], payload.category_id)
    return row


async def update_goods_item(item_id: int, payload: schemas.GoodsItemUpdateRequest) -> dict:
    row = await repository.update_goods_item(
        item_id,
        name=_clean(payload.name, field="Item name"),
        required_quantity=_clean_optional(payload.required_quantity),
    )
    if row is None:
        raise HTTPException(status_code=404, detail="Goods item not found.")
    return row


async def delete_goods_item(item_id: int) -> dict:
    if not await repository.delete_goods_item(item_id):
        raise HTTPException(status_code=404, detail="Goods item not found.")
    logger.info("Deleted goods item %s", item_id)
    return {"ok": True, "item_id": item_id}
