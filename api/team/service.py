"""
Team service: public org chart and admin member management.
"""

from __future__ import annotations

import logging

from fastapi import HTTPException, UploadFile

from core import settings, storage, uploads

from . import hierarchy, repository, schemas

logger = logging.getLogger(__name__)


def _with_tier(row: dict) -> dict:
    row["tier"] = hierarchy.position_tier(row.get("position"))
    return row


async def org_chart(*, year: str | None = None) -> dict:
    year = (year or "").strip() or settings.team_year()
    members = await repository.list_members_for_year(year)
    chart = hierarchy.build_org_chart(members)
    if chart.unassigned:
        logger.warning(
            "%d team member(s) in %s have no known position: %s",
            len(chart.unassigned),
            year,
            sorted({str(m.get("position")) for m in chart.unassigned}),
        )
    return {"year": year, **chart.to_dict()}


def positions() -> dict:
    return {
        "positions": [{"title": p.value, "tier": p.tier} for p in hierarchy.Position],
    }


async def list_members() -> dict:
    rows = [_with_tier(r) for r in await repository.list_all_members()]
    return {"members": rows, "count": len(rows)}


def _member_fields(payload: schemas.TeamMemberRequest) -> dict:
    name = payload.name.strip()
    position = payload.position.strip()
    year = payload.year.strip()
    if not name or not position or not year:
        raise HTTPException(status_code=422, detail="Name, position and year are required.")
    if hierarchy.Position.parse(position) is None:
        logger.warning("Saving team member %r with unknown position %r", name, position)
    return {
        "name": name,
        "position": position,
        "year": year,
        "display_order": payload.display_order,
        "image_url": (payload.image_url or "").strip() or None,
    }


async def create_member(payload: schemas.TeamMemberRequest) -> dict:
    row = await repository.insert_member(**_member_fields(payload))
    logger.info("Added team member %s", row["id"])
    return _with_tier(row)


async def update_member(member_id: int, payload: schemas.TeamMemberRequest) -> dict:
    existing = await repository.get_member(member_id)
    if existing is None:
        raise HTTPException(status_code=404, detail="Team member not found.")

    fields = _member_fields(payload)
    row = await repository.update_member(member_id, **fields)
    if row is None:
        raise HTTPException(status_code=404, detail="Team member not found.")

    old_url = existing.get("image_url")
    if old_url and old_url != fields["image_url"]:
        await uploads.remove_image(storage.TEAM_PHOTOS_BUCKET, old_url)
    return _with_tier(row)


async def delete_member(member_id: int) -> dict:
    row = await repository.delete_member(member_id)
    if row is None:
        raise HTTPException(status_code=404, detail="Team member not found.")
    await uploads.remove_image(storage.TEAM_PHOTOS_BUCKET, row.get("image_url"))
    logger.info("Deleted team member %s", member_id)
    return {"ok": True, "member_id": member_id}


async def upload_photo(file: UploadFile) -> dict:
    stored = await uploads.store_image(file, bucket=storage.TEAM_PHOTOS_BUCKET)
    return {"image_url": stored.url, "filename": stored.filename, "size_bytes": stored.size_bytes}
