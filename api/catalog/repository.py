"""
Donation category and goods item persistence (raw SQL).
"""

from __future__ import annotations

from core import db


async def list_categories(program_id: int) -> list[dict]:
    return await db.fetch_all(
        """
        SELECT id, program_id, name, created_at
        FROM donation_categories
        WHERE program_id = $1
        ORDER BY created_at ASC, id ASC
        """,
        program_id,
    )


async def list_categories_for_programs(program_ids: list[int]) -> list[dict]:
    if not program_ids:
        return []
    return await db.fetch_all(
        """
        SELECT id, program_id, name, created_at
        FROM donation_categories
        WHERE program_id = ANY($1::bigint[])
        ORDER BY created_at ASC, id ASC
        """,
        program_ids,
    )


async def list_all_categories() -> list[dict]:
    return await db.fetch_all(
        """
        SELECT c.id, c.program_id, c.name, c.created_at, p.title AS program_title
        FROM donation_categories c
        JOIN programs p ON p.id = c.program_id
        ORDER BY c.name ASC, c.id ASC
        """
    )


async def get_category(category_id: int) -> dict | None:
    return await db.fetch_one(
        """
        SELECT id, program_id, name, created_at
        FROM donation_categories
        WHERE id = $1
        """,
        category_id,
    )


async def insert_category(*, program_id: int, name: str) -> dict:
    row = await db.fetch_one(
        """
        INSERT INTO donation_categories (program_id, name)
        VALUES ($1, $2)
        RETURNING id, program_id, name, created_at
        """,
        program_id,
        name,
    )
    if row is None:
        raise RuntimeError("Failed to insert donation category.")
    return row


async def delete_category(category_id: int) -> bool:
    status = await db.execute("DELETE FROM donation_categories WHERE id = $1", category_id)
    return db.affected_rows(status) > 0


async def list_goods_items(category_id: int) -> list[dict]:
    return await db.fetch_all(
        """
        SELECT id, category_id, name, required_quantity, created_at
        FROM goods_items
        WHERE category_id = $1
        ORDER BY name ASC, id ASC
        """,
        category_id,
    )


async def list_all_goods_items() -> list[dict]:
    return await db.fetch_all(
        """
        SELECT g.id, g.category_id, g.name, g.required_quantity, g.created_at,
               c.name AS category_name
        FROM goods_items g
        LEFT JOIN donation_categories c ON c.id = g.category_id
        ORDER BY g.name ASC, g.id ASC
        """
    )


async def list_goods_items_for_program(program_id: int) -> list[dict]:
    """
    Goods items of every category that belongs to the program.
    """
    return await db.fetch_all(
        """
        SELECT g.id, g.category_id, g.name, g.required_quantity
        FROM goods_items g
        JOIN donation_categories c ON c.id = g.category_id
        WHERE c.program_id = $1
        ORDER BY c.id ASC, g.name ASC, g.id ASC
        """,
        program_id,
    )


async def get_goods_item(item_id: int) -> dict | None:
    return await db.fetch_one(
        """
        SELECT id, category_id, name, required_quantity, created_at
        FROM goods_items
        WHERE id = $1
        """,
        item_id,
    )


async def count_goods_items_in_category(category_id: int, item_ids: list[int]) -> int:
    value = await db.fetch_value(
        """
        SELECT count(*)
        FROM goods_items
        WHERE category_id = $1
          AND id = ANY($2::bigint[])
        """,
        category_id,
        item_ids,
    )
    return int(value or 0)


async def insert_goods_item(*, category_id: int, name: str, required_quantity: str | None) -> dict:
    row = await db.fetch_one(
        """
        INSERT INTO goods_items (category_id, name, required_quantity)
        VALUES ($1, $2, $3)
        RETURNING id, category_id, name, required_quantity, created_at
        """,
        category_id,
        name,
        required_quantity,
    )
    if row is None:
        raise RuntimeError("Failed to insert goods item.")
    return row


async def update_goods_item(item_id: int, *, name: str, required_quantity: str | None) -> dict | None:
    return await db.fetch_one(
        """
        UPDATE goods_items
        SET name = $2,
            required_quantity = COALESCE($3, required_quantity)
        WHERE id = $1
        RETURNING id, category_id, name, required_quantity, created_at
        """,
        item_id,
        name,
        required_quantity,
    )


async def delete_goods_item(item_id: int) -> bool:
    status = await db.execute("DELETE FROM goods_items WHERE id = $1", item_id)
    return db.affected_rows(status) > 0
