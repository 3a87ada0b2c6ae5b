"""
Program service.

Public side: published listings with fundraising stats and the program
detail view with goods progress.
Admin side: program CRUD, images and goods requirements.
"""

from __future__ import annotations

import asyncio
import logging
from decimal import Decimal
from typing import Any

import asyncpg
from fastapi import HTTPException, UploadFile

from catalog import repository as catalog_repository
from core import storage, uploads
from core.formatting import money_value
from donations import progress
from donations import repository as donation_repository
from expenses import repository as expense_repository

from . import repository, schemas

FEATURE_IMAGE_ORDER = 0

logger = logging.getLogger(__name__)


def _group_by_program(rows: list[dict]) -> dict[int, list[dict]]:
    grouped: dict[int, list[dict]] = {}
    for row in rows:
        grouped.setdefault(int(row["program_id"]), []).append(row)
    return grouped


def funding_goal(program: dict) -> Decimal | None:
    goal = program.get("funding_goal")
    return goal if goal is not None else program.get("total_cost")


def charity_stats(program: dict, donations: list[dict], total_expenses: Decimal) -> dict[str, Any]:
    """
    Money raised (received money donations only), expenses and what is left
    of the program budget.
    """
    raised = progress.sum_received_money(donations)
    total_cost = program.get("total_cost") or Decimal("0")
    return {
        "amount_raised": money_value(raised),
        "total_expenses": money_value(total_expenses),
        "amount_remaining": money_value(total_cost - total_expenses),
        "funding_percentage": progress.funding_percentage(raised, funding_goal(program)),
    }


def donation_stats(program: dict, donations: list[dict]) -> dict[str, Any]:
    received = [d for d in donations if d.get("status") == progress.STATUS_RECEIVED]
    raised = progress.sum_received_money(received)
    return {
        "total_raised": money_value(raised),
        "donation_count": sum(1 for d in received if d.get("donation_type") == progress.TYPE_MONEY),
        "goods_count": sum(1 for d in received if d.get("donation_type") == progress.TYPE_GOODS),
        "funding_percentage": progress.funding_percentage(raised, funding_goal(program)),
    }


async def list_public_programs(*, category: str | None = None) -> dict:
    programs = await repository.list_published_programs(category=category)
    program_ids = [int(p["id"]) for p in programs]
    charity_ids = [int(p["id"]) for p in programs if p["category"] == "charity"]

    images, categories, donations, expense_totals = await asyncio.gather(
        repository.list_images_for_programs(program_ids),
        catalog_repository.list_categories_for_programs(program_ids),
        donation_repository.list_program_donations(charity_ids),
        expense_repository.totals_by_program(charity_ids),
    )
    images_by_program = _group_by_program(images)
    categories_by_program = _group_by_program(categories)
    donations_by_program = _group_by_program(donations)

    for program in programs:
        program_id = int(program["id"])
        program["program_images"] = images_by_program.get(program_id, [])
        program["donation_categories"] = categories_by_program.get(program_id, [])
        if program["category"] == "charity":
            program.update(
                charity_stats(
                    program,
                    donations_by_program.get(program_id, []),
                    expense_totals.get(program_id, Decimal("0")),
                )
            )

    return {"programs": programs, "count": len(programs)}


async def recent_programs(*, limit: int = 3) -> dict:
    rows = await repository.list_recent_published(limit=limit)
    return {"programs": rows, "count": len(rows)}


async def goods_progress(program_id: int) -> list[dict]:
    required_items, donated_items = await asyncio.gather(
        catalog_repository.list_goods_items_for_program(program_id),
        donation_repository.list_donated_items_for_program(program_id),
    )
    return [p.to_dict() for p in progress.compute_goods_progress(required_items, donated_items)]


async def _require_published(program_id: int) -> dict:
    program = await repository.get_program(program_id)
    if program is None or program["status"] != "published":
        raise HTTPException(status_code=404, detail="Program not found.")
    return program


async def public_goods_progress(program_id: int) -> dict:
    await _require_published(program_id)
    rows = await goods_progress(program_id)
    return {"program_id": program_id, "goods_progress": rows, "count": len(rows)}


async def program_detail(program_id: int) -> dict:
    program = await _require_published(program_id)

    images, goods = await asyncio.gather(
        repository.list_images(program_id),
        goods_progress(program_id),
    )

    stats = None
    if program["category"] == "charity":
        donations = await donation_repository.list_program_donations([program_id])
        stats = donation_stats(program, donations)

    return {
        "program": program,
        "images": images,
        "donation_stats": stats,
        "goods_progress": goods,
    }


async def _require_program(program_id: int) -> dict:
    program = await repository.get_program(program_id)
    if program is None:
        raise HTTPException(status_code=404, detail="Program not found.")
    return program


def _program_fields(payload: schemas.ProgramRequest) -> dict[str, Any]:
    title = payload.title.strip()
    if not title:
        raise HTTPException(status_code=422, detail="Title is required.")

    # Budget fields only apply to charity programs.
    cost = payload.total_cost if payload.category == "charity" else None
    return {
        "title": title,
        "category": payload.category,
        "description": payload.description.strip(),
        "date": payload.date,
        "location": (payload.location or "").strip() or None,
        "total_cost": cost,
        "funding_goal": cost,
        "status": payload.status,
    }


async def admin_list_programs(*, category: str | None = None) -> dict:
    rows = await repository.list_all_programs(category=category)
    return {"programs": rows, "count": len(rows)}


async def admin_get_program(program_id: int) -> dict:
    program = await _require_program(program_id)
    return {"program": program, "images": await repository.list_images(program_id)}


async def create_program(payload: schemas.ProgramRequest) -> dict:
    row = await repository.insert_program(**_program_fields(payload))
    logger.info("Created program %s (%s)", row["id"], row["category"])
    return row


async def update_program(program_id: int, payload: schemas.ProgramRequest) -> dict:
    row = await repository.update_program(program_id, **_program_fields(payload))
    if row is None:
        raise HTTPException(status_code=404, detail="Program not found.")
    logger.info("Updated program %s", program_id)
    return row


async def delete_program(program_id: int) -> dict:
    images = await repository.list_images(program_id)
    if not await repository.delete_program(program_id):
        raise HTTPException(status_code=404, detail="Program not found.")
    for image in images:
        await uploads.remove_image(storage.PROGRAM_IMAGES_BUCKET, image["image_url"])
    logger.info("Deleted program %s with %d image(s)", program_id, len(images))
    return {"ok": True, "program_id": program_id}


async def add_feature_image(program_id: int, file: UploadFile) -> dict:
    """
    Store a new feature image (display order 0), replacing the current one.
    """
    await _require_program(program_id)
    stored = await uploads.store_image(file, bucket=storage.PROGRAM_IMAGES_BUCKET)

    for old in await repository.delete_feature_images(program_id):
        await uploads.remove_image(storage.PROGRAM_IMAGES_BUCKET, old["image_url"])

    return await repository.insert_image(
        program_id=program_id,
        image_url=stored.url,
        display_order=FEATURE_IMAGE_ORDER,
    )


async def add_gallery_images(program_id: int, files: list[UploadFile]) -> dict:
    """
    Append gallery images after the current highest display order.
    """
    await _require_program(program_id)
    if not files:
        raise HTTPException(status_code=400, detail="No images uploaded.")

    next_order = await repository.max_image_order(program_id) + 1
    images: list[dict] = []
    for offset, file in enumerate(files):
        stored = await uploads.store_image(file, bucket=storage.PROGRAM_IMAGES_BUCKET)
        images.append(
            await repository.insert_image(
                program_id=program_id,
                image_url=stored.url,
                display_order=next_order + offset,
            )
        )
    return {"images": images, "count": len(images)}


async def delete_image(program_id: int, image_id: int) -> dict:
    image = await repository.get_image(image_id)
    if image is None or int(image["program_id"]) != program_id:
        raise HTTPException(status_code=404, detail="Image not found.")

    await repository.delete_image(image_id)
    removed = await uploads.remove_image(storage.PROGRAM_IMAGES_BUCKET, image["image_url"])
    return {"ok": True, "image_id": image_id, "storage_removed": removed}


async def list_requirements(program_id: int) -> dict:
    program = await _require_program(program_id)
    rows = await repository.list_requirements(program_id)
    return {"program_title": program["title"], "requirements": rows, "count": len(rows)}


async def add_requirement(program_id: int, payload: schemas.RequirementCreateRequest) -> dict:
    quantity = payload.required_quantity.strip()
    if not quantity:
        raise HTTPException(status_code=422, detail="Please select an item and enter required quantity.")

    await _require_program(program_id)
    if await catalog_repository.get_goods_item(payload.goods_item_id) is None:
        raise HTTPException(status_code=404, detail="Goods item not found.")

    try:
        return await repository.insert_requirement(
            program_id=program_id,
            goods_item_id=payload.goods_item_id,
            required_quantity=quantity,
        )
    except asyncpg.ForeignKeyViolationError as exc:
        raise HTTPException(status_code=409, detail="Program or goods item no longer exists.") from exc


async def delete_requirement(program_id: int, requirement_id: int) -> dict:
    if not await repository.delete_requirement(program_id, requirement_id):
        raise HTTPException(status_code=404, detail="Requirement not found.")
    return {"ok": True, "requirement_id": requirement_id}
