"""
Donation persistence (raw SQL).
"""

from __future__ import annotations

from decimal import Decimal

from core import db

_DONATION_COLUMNS = """
    d.id, d.donor_name, d.donor_address, d.donor_contact, d.program_id,
    d.category_id, d.donation_type, d.amount, d.status, d.donation_date, d.created_at
"""


async def insert_donation_with_items(
    *,
    donor_name: str,
    donor_address: str,
    donor_contact: str,
    program_id: int,
    category_id: int | None,
    donation_type: str,
    amount: Decimal | None,
    status: str,
    items: list[tuple[int, str]],
) -> tuple[dict, int]:
    """
    Insert a donation + its goods items in a single transaction.

    `items` is [(goods_item_id, quantity), ...]. Returns (donation_row, item_count).
    """
    async with db.transaction() as conn:
        record = await conn.fetchrow(
            """
            INSERT INTO donations (donor_name, donor_address, donor_contact, program_id,
                                   category_id, donation_type, amount, status)
            VALUES ($1, $2, $3, $4, $5, $6, $7, $8)
            RETURNING id, donor_name, donor_address, donor_contact, program_id,
                      category_id, donation_type, amount, status, donation_date, created_at
            """,
            donor_name,
            donor_address,
            donor_contact,
            program_id,
            category_id,
            donation_type,
            amount,
            status,
        )
        if record is None:
            raise RuntimeError("Failed to insert donation.")

        donation = dict(record)
        if items:
            await conn.executemany(
                "INSERT INTO donation_items (donation_id, goods_item_id, quantity) VALUES ($1, $2, $3)",
                [(int(donation["id"]), item_id, quantity) for (item_id, quantity) in items],
            )
        return donation, len(items)


async def list_donations(*, status: str | None = None) -> list[dict]:
    return await db.fetch_all(
        f"""
        SELECT {_DONATION_COLUMNS},
               p.title AS program_title,
               c.name AS category_name
        FROM donations d
        JOIN programs p ON p.id = d.program_id
        LEFT JOIN donation_categories c ON c.id = d.category_id
        WHERE ($1::text IS NULL OR d.status = $1)
        ORDER BY d.donation_date DESC, d.id DESC
        """,
        status,
    )


async def list_items_for_donations(donation_ids: list[int]) -> list[dict]:
    if not donation_ids:
        return []
    return await db.fetch_all(
        """
        SELECT di.id, di.donation_id, di.goods_item_id, di.quantity, g.name AS item_name
        FROM donation_items di
        LEFT JOIN goods_items g ON g.id = di.goods_item_id
        WHERE di.donation_id = ANY($1::bigint[])
        ORDER BY di.id ASC
        """,
        donation_ids,
    )


async def update_status(donation_id: int, status: str) -> dict | None:
    return await db.fetch_one(
        """
        UPDATE donations
        SET status = $2
        WHERE id = $1
        RETURNING id, status
        """,
        donation_id,
        status,
    )


async def list_program_donations(program_ids: list[int]) -> list[dict]:
    """
    Type, status and amount of every donation to the given programs.
    """
    if not program_ids:
        return []
    return await db.fetch_all(
        """
        SELECT id, program_id, donation_type, status, amount
        FROM donations
        WHERE program_id = ANY($1::bigint[])
        """,
        program_ids,
    )


async def list_donated_items_for_program(program_id: int) -> list[dict]:
    """
    Donated goods of a program tagged with the owning donation's status.
    """
    return await db.fetch_all(
        """
        SELECT di.goods_item_id, di.quantity, d.status
        FROM donation_items di
        JOIN donations d ON d.id = di.donation_id
        WHERE d.program_id = $1
        """,
        program_id,
    )
