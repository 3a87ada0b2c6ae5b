"""
Donation service: public submission, the public history of received
donations, and admin status management.
"""

from __future__ import annotations

import logging
from decimal import Decimal

import asyncpg
from fastapi import HTTPException

from catalog import repository as catalog_repository
from core.formatting import format_currency, format_date, money_value
from programs import repository as program_repository

from . import progress, repository, schemas

logger = logging.getLogger(__name__)


def _required(value: str | None) -> str:
    return (value or "").strip()


def format_goods_description(items: list[dict]) -> str:
    if not items:
        return "No items"
    return ", ".join(f"{item.get('item_name') or 'Unknown item'} - {item['quantity']}" for item in items)


async def _check_category(category_id: int, program_id: int) -> None:
    category = await catalog_repository.get_category(category_id)
    if category is None or int(category["program_id"]) != program_id:
        raise HTTPException(status_code=422, detail="Category does not belong to this program.")


async def _validate_goods(payload: schemas.DonationRequest) -> list[tuple[int, str]]:
    if payload.category_id is None:
        raise HTTPException(status_code=422, detail="Please select a category for goods donation.")
    await _check_category(payload.category_id, payload.program_id)

    if not payload.items:
        raise HTTPException(status_code=422, detail="Please select at least one item to donate.")

    items: list[tuple[int, str]] = []
    seen: set[int] = set()
    for item in payload.items:
        quantity = item.quantity.strip()
        if not quantity:
            raise HTTPException(status_code=422, detail="Please enter quantity for all selected items.")
        if not progress.is_valid_donated_quantity(quantity):
            raise HTTPException(
                status_code=422,
                detail=f"Quantity '{quantity}' must start with a positive whole number (e.g. '10 kg').",
            )
        if item.goods_item_id in seen:
            raise HTTPException(status_code=422, detail="Each item can only be listed once.")
        seen.add(item.goods_item_id)
        items.append((item.goods_item_id, quantity))

    matched = await catalog_repository.count_goods_items_in_category(payload.category_id, sorted(seen))
    if matched != len(seen):
        raise HTTPException(status_code=422, detail="Selected items do not belong to this category.")
    return items


async def submit_donation(payload: schemas.DonationRequest) -> dict:
    """
    Record a donation as Pending; an admin marks it Received later.
    """
    donor_name = _required(payload.donor_name)
    donor_address = _required(payload.donor_address)
    donor_contact = _required(payload.donor_contact)
    if not donor_name or not donor_address or not donor_contact:
        raise HTTPException(status_code=422, detail="Please fill in all required fields.")

    program = await program_repository.get_program(payload.program_id)
    if program is None or program["category"] != "charity" or program["status"] != "published":
        raise HTTPException(status_code=422, detail="Please select a program.")

    amount: Decimal | None = None
    items: list[tuple[int, str]] = []
    if payload.donation_type == progress.TYPE_MONEY:
        if payload.amount is None or payload.amount <= 0:
            raise HTTPException(status_code=422, detail="Please enter a valid donation amount.")
        amount = payload.amount
        if payload.category_id is not None:
            await _check_category(payload.category_id, payload.program_id)
    else:
        items = await _validate_goods(payload)

    try:
        donation, item_count = await repository.insert_donation_with_items(
            donor_name=donor_name,
            donor_address=donor_address,
            donor_contact=donor_contact,
            program_id=payload.program_id,
            category_id=payload.category_id,
            donation_type=payload.donation_type,
            amount=amount,
            status=progress.STATUS_PENDING,
            items=items,
        )
    except asyncpg.ForeignKeyViolationError as exc:
        raise HTTPException(status_code=409, detail="Program, category or item no longer exists.") from exc
    logger.info(
        "Donation %s submitted: type=%s program=%s items=%d",
        donation["id"],
        payload.donation_type,
        payload.program_id,
        item_count,
    )
    return {"donation": donation, "item_count": item_count}


async def _attach_items(donations: list[dict]) -> None:
    items = await repository.list_items_for_donations([int(d["id"]) for d in donations])
    by_donation: dict[int, list[dict]] = {}
    for item in items:
        by_donation.setdefault(int(item["donation_id"]), []).append(item)
    for donation in donations:
        donation["donation_items"] = by_donation.get(int(donation["id"]), [])


async def donation_history() -> dict:
    """
    Received donations only, newest first, with a money/goods summary.
    """
    donations = await repository.list_donations(status=progress.STATUS_RECEIVED)
    await _attach_items(donations)
    for donation in donations:
        if donation["donation_type"] == progress.TYPE_GOODS:
            donation["goods_description"] = format_goods_description(donation["donation_items"])
        else:
            donation["formatted_amount"] = format_currency(donation.get("amount"))
        donation["formatted_date"] = format_date(donation["donation_date"])

    total_money = progress.sum_received_money(donations)
    return {
        "donations": donations,
        "count": len(donations),
        "summary": {
            "total_money": money_value(total_money),
            "formatted_total_money": format_currency(total_money),
            "money_count": sum(1 for d in donations if d["donation_type"] == progress.TYPE_MONEY),
            "goods_count": sum(1 for d in donations if d["donation_type"] == progress.TYPE_GOODS),
        },
    }


async def admin_list_donations(*, status: str | None = None) -> dict:
    donations = await repository.list_donations(status=status)
    await _attach_items(donations)
    return {
        "donations": donations,
        "count": len(donations),
        "stats": {
            "all": len(donations),
            "pending": sum(1 for d in donations if d["status"] == progress.STATUS_PENDING),
            "received": sum(1 for d in donations if d["status"] == progress.STATUS_RECEIVED),
        },
    }


async def update_status(donation_id: int, payload: schemas.StatusUpdateRequest) -> dict:
    row = await repository.update_status(donation_id, payload.status)
    if row is None:
        raise HTTPException(status_code=404, detail="Donation not found.")
    logger.info("Donation %s marked %s", donation_id, payload.status)
    return {"ok": True, "donation_id": int(row["id"]), "status": row["status"]}
