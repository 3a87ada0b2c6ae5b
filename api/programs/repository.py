"""
Program, program image and goods requirement persistence (raw SQL).
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from core import db

_PROGRAM_COLUMNS = """
    id, title, category, description, date, location, total_cost,
    funding_goal, status, created_at, updated_at
"""


async def list_published_programs(*, category: str | None = None) -> list[dict]:
    return await db.fetch_all(
        f"""
        SELECT {_PROGRAM_COLUMNS}
        FROM programs
        WHERE status = 'published'
          AND ($1::text IS NULL OR category = $1)
        ORDER BY date DESC, id DESC
        """,
        category,
    )


async def list_recent_published(*, limit: int = 3) -> list[dict]:
    """
    Latest published programs with their first image (by display order).
    """
    return await db.fetch_all(
        """
        SELECT p.id, p.title, p.description, p.category, p.date, p.location,
               p.funding_goal, img.image_url
        FROM programs p
        LEFT JOIN LATERAL (
          SELECT i.image_url
          FROM program_images i
          WHERE i.program_id = p.id
          ORDER BY i.display_order ASC, i.id ASC
          LIMIT 1
        ) img ON true
        WHERE p.status = 'published'
        ORDER BY p.date DESC, p.id DESC
        LIMIT $1
        """,
        limit,
    )


async def list_charity_programs(*, published_only: bool) -> list[dict]:
    return await db.fetch_all(
        """
        SELECT id, title, status
        FROM programs
        WHERE category = 'charity'
          AND (NOT $1 OR status = 'published')
        ORDER BY date DESC, id DESC
        """,
        published_only,
    )


async def list_all_programs(*, category: str | None = None) -> list[dict]:
    return await db.fetch_all(
        f"""
        SELECT {_PROGRAM_COLUMNS}
        FROM programs
        WHERE ($1::text IS NULL OR category = $1)
        ORDER BY created_at DESC, id DESC
        """,
        category,
    )


async def get_program(program_id: int) -> dict | None:
    return await db.fetch_one(
        f"""
        SELECT {_PROGRAM_COLUMNS}
        FROM programs
        WHERE id = $1
        """,
        program_id,
    )


async def insert_program(
    *,
    title: str,
    category: str,
    description: str,
    date: date,
    location: str | None,
    total_cost: Decimal | None,
    funding_goal: Decimal | None,
    status: str,
) -> dict:
    row = await db.fetch_one(
        f"""
        INSERT INTO programs (title, category, description, date, location, total_cost, funding_goal, status)
        VALUES ($1, $2, $3, $4, $5, $6, $7, $8)
        RETURNING {_PROGRAM_COLUMNS}
        """,
        title,
        category,
        description,
        date,
        location,
        total_cost,
        funding_goal,
        status,
    )
    if row is None:
        raise RuntimeError("Failed to insert program.")
    return row


async def update_program(
    program_id: int,
    *,
    title: str,
    category: str,
    description: str,
    date: date,
    location: str | None,
    total_cost: Decimal | None,
    funding_goal: Decimal | None,
    status: str,
) -> dict | None:
    return await db.fetch_one(
        f"""
        UPDATE programs
        SET title = $2,
            category = $3,
            description = $4,
            date = $5,
            location = $6,
            total_cost = $7,
            funding_goal = $8,
            status = $9,
            updated_at = now()
        WHERE id = $1
        RETURNING {_PROGRAM_COLUMNS}
        """,
        program_id,
        title,
        category,
        description,
        date,
        location,
        total_cost,
        funding_goal,
        status,
    )


async def delete_program(program_id: int) -> bool:
    status = await db.execute("DELETE FROM programs WHERE id = $1", program_id)
    return db.affected_rows(status) > 0


async def list_images(program_id: int) -> list[dict]:
    return await db.fetch_all(
        """
        SELECT id, program_id, image_url, display_order, created_at
        FROM program_images
        WHERE program_id = $1
        ORDER BY display_order ASC, id ASC
        """,
        program_id,
    )


async def list_images_for_programs(program_ids: list[int]) -> list[dict]:
    if not program_ids:
        return []
    return await db.fetch_all(
        """
        SELECT id, program_id, image_url, display_order, created_at
        FROM program_images
        WHERE program_id = ANY($1::bigint[])
        ORDER BY display_order ASC, id ASC
        """,
        program_ids,
    )


async def get_image(image_id: int) -> dict | None:
    return await db.fetch_one(
        """
        SELECT id, program_id, image_url, display_order, created_at
        FROM program_images
        WHERE id = $1
        """,
        image_id,
    )


async def max_image_order(program_id: int) -> int:
    value = await db.fetch_value(
        "SELECT COALESCE(max(display_order), 0) FROM program_images WHERE program_id = $1",
        program_id,
    )
    return int(value or 0)


async def insert_image(*, program_id: int, image_url: str, display_order: int) -> dict:
    row = await db.fetch_one(
        """
        INSERT INTO program_images (program_id, image_url, display_order)
        VALUES ($1, $2, $3)
        RETURNING id, program_id, image_url, display_order, created_at
        """,
        program_id,
        image_url,
        display_order,
    )
    if row is None:
        raise RuntimeError("Failed to insert program image.")
    return row


async def delete_image(image_id: int) -> dict | None:
    return await db.fetch_one(
        """
        DELETE FROM program_images
        WHERE id = $1
        RETURNING id, program_id, image_url, display_order
        """,
        image_id,
    )


async def delete_feature_images(program_id: int) -> list[dict]:
    return await db.fetch_all(
        """
        DELETE FROM program_images
        WHERE program_id = $1
          AND display_order = 0
        RETURNING id, program_id, image_url, display_order
        """,
        program_id,
    )


async def list_requirements(program_id: int) -> list[dict]:
    return await db.fetch_all(
        """
        SELECT r.id, r.program_id, r.goods_item_id, r.required_quantity, r.created_at,
               g.name AS item_name, c.name AS category_name
        FROM program_goods_requirements r
        JOIN goods_items g ON g.id = r.goods_item_id
        LEFT JOIN donation_categories c ON c.id = g.category_id
        WHERE r.program_id = $1
        ORDER BY r.created_at ASC, r.id ASC
        """,
        program_id,
    )


async def insert_requirement(*, program_id: int, goods_item_id: int, required_quantity: str) -> dict:
    row = await db.fetch_one(
        """
        INSERT INTO program_goods_requirements (program_id, goods_item_id, required_quantity)
        VALUES ($1, $2, $3)
        RETURNING id, program_id, goods_item_id, required_quantity, created_at
        """,
        program_id,
        goods_item_id,
        required_quantity,
    )
    if row is None:
        raise RuntimeError("Failed to insert goods requirement.")
    return row


async def delete_requirement(program_id: int, requirement_id: int) -> bool:
    status = await db.execute(
        "DELETE FROM program_goods_requirements WHERE id = $1 AND program_id = $2",
        requirement_id,
        program_id,
    )
    return db.affected_rows(status) > 0
