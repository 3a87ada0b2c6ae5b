"""
Team member persistence (raw SQL).
"""

from __future__ import annotations

from core import db

_MEMBER_COLUMNS = "id, name, position, year, display_order, image_url, created_at"


async def list_members_for_year(year: str) -> list[dict]:
    # created_at/id keep ties in insertion order.
    return await db.fetch_all(
        f"""
        SELECT {_MEMBER_COLUMNS}
        FROM team_members
        WHERE year = $1
        ORDER BY display_order ASC, created_at ASC, id ASC
        """,
        year,
    )


async def list_all_members() -> list[dict]:
    return await db.fetch_all(
        f"""
        SELECT {_MEMBER_COLUMNS}
        FROM team_members
        ORDER BY year DESC, display_order ASC, created_at ASC, id ASC
        """
    )


async def get_member(member_id: int) -> dict | None:
    return await db.fetch_one(
        f"SELECT {_MEMBER_COLUMNS} FROM team_members WHERE id = $1",
        member_id,
    )


async def insert_member(
    *,
    name: str,
    position: str,
    year: str,
    display_order: int,
    image_url: str | None,
) -> dict:
    row = await db.fetch_one(
        f"""
        INSERT INTO team_members (name, position, year, display_order, image_url)
        VALUES ($1, $2, $3, $4, $5)
        RETURNING {_MEMBER_COLUMNS}
        """,
        name,
        position,
        year,
        display_order,
        image_url,
    )
    if row is None:
        raise RuntimeError("Failed to insert team member.")
    return row


async def update_member(
    member_id: int,
    *,
    name: str,
    position: str,
    year: str,
    display_order: int,
    image_url: str | None,
) -> dict | None:
    return await db.fetch_one(
        f"""
        UPDATE team_members
        SET name = $2,
            position = $3,
            year = $4,
            display_order = $5,
            image_url = $6
        WHERE id = $1
        RETURNING {_MEMBER_COLUMNS}
        """,
        member_id,
        name,
        position,
        year,
        display_order,
        image_url,
    )


async def delete_member(member_id: int) -> dict | None:
    return await db.fetch_one(
        "DELETE FROM team_members WHERE id = $1 RETURNING id, image_url",
        member_id,
    )
