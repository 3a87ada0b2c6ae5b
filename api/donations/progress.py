"""
Donation progress computations.

Pure functions over rows already loaded from the database:
- parse free-text quantities ("10 kg") into numbers
- aggregate received goods per required item
- monetary funding percentage

Only donations with status "Received" count toward any total.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Iterable

from core.formatting import calculate_percentage

STATUS_PENDING = "Pending"
STATUS_RECEIVED = "Received"

TYPE_MONEY = "money"
TYPE_GOODS = "goods"

# Leading signed ASCII integer, then whatever unit text follows.
_QUANTITY_RE = re.compile(r"^\s*([+-]?[0-9]+)(.*)$", re.DOTALL)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ParsedQuantity:
    raw: str
    value: int
    unit: str
    is_numeric: bool


@dataclass(frozen=True)
class GoodsProgress:
    item_id: int
    item_name: str
    required: str
    collected: int
    percentage: int
    unparsed: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "item_id": self.item_id,
            "item_name": self.item_name,
            "required": self.required,
            "collected": self.collected,
            "percentage": self.percentage,
            "unparsed": self.unparsed,
        }


def parse_quantity(raw: str | None) -> ParsedQuantity:
    """
    Parse the leading integer of a quantity string.

    "10 kg" -> 10 (unit "kg"), "12.5" -> 12, "a few" -> 0 with
    is_numeric=False so callers can flag it.
    """
    text = "" if raw is None else str(raw)
    match = _QUANTITY_RE.match(text)
    if match is None:
        return ParsedQuantity(raw=text, value=0, unit=text.strip(), is_numeric=False)
    return ParsedQuantity(
        raw=text,
        value=int(match.group(1)),
        unit=match.group(2).strip(),
        is_numeric=True,
    )


def is_valid_donated_quantity(raw: str | None) -> bool:
    """
    New donations must state a positive leading integer.
    """
    parsed = parse_quantity(raw)
    return parsed.is_numeric and parsed.value > 0


def goods_percentage(collected: int, required: int) -> int:
    return calculate_percentage(collected, required) if required > 0 else 0


def funding_percentage(raised: float | Decimal | None, goal: float | Decimal | None) -> int:
    return calculate_percentage(raised, goal)


def sum_received_money(donations: Iterable[dict]) -> Decimal:
    """
    Total `amount` of received money donations; other rows are ignored.
    """
    total = Decimal("0")
    for donation in donations:
        if donation.get("donation_type") != TYPE_MONEY:
            continue
        if donation.get("status") != STATUS_RECEIVED:
            continue
        total += Decimal(str(donation.get("amount") or 0))
    return total


def collect_received(donated_items: Iterable[dict]) -> dict[int, tuple[int, int]]:
    """
    Sum donated quantities per goods item over received donations.

    Each row needs `goods_item_id`, `quantity` and `status` (the owning
    donation's status). Returns {goods_item_id: (collected, unparsed_count)}.
    """
    totals: dict[int, tuple[int, int]] = {}
    for row in donated_items:
        if row.get("status") != STATUS_RECEIVED:
            continue
        item_id = int(row["goods_item_id"])
        parsed = parse_quantity(row.get("quantity"))
        collected, unparsed = totals.get(item_id, (0, 0))
        if not parsed.is_numeric:
            unparsed += 1
            logger.warning(
                "Unparseable donated quantity %r for goods item %s counted as 0",
                parsed.raw,
                item_id,
            )
        totals[item_id] = (collected + parsed.value, unparsed)
    return totals


def compute_goods_progress(required_items: Iterable[dict], donated_items: Iterable[dict]) -> list[GoodsProgress]:
    """
    One progress record per required goods item, in input order.

    `required_items` rows need `id`, `name` and `required_quantity`.
    """
    totals = collect_received(donated_items)
    progress: list[GoodsProgress] = []
    for item in required_items:
        item_id = int(item["id"])
        required_raw = item.get("required_quantity") or ""
        required = parse_quantity(required_raw).value
        collected, unparsed = totals.get(item_id, (0, 0))
        progress.append(
            GoodsProgress(
                item_id=item_id,
                item_name=str(item.get("name") or ""),
                required=str(required_raw),
                collected=collected,
                percentage=goods_percentage(collected, required),
                unparsed=unparsed,
            )
        )
    return progress
