"""
Committee org chart.

Positions form a closed set; each maps to a display tier (1 = top,
4 = base). Members whose position is not in the set land in `unassigned`
instead of any tier.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, Iterable

TIER_COUNT = 4


class Position(str, enum.Enum):
    SENIOR_TREASURER = "Senior Treasurer"
    PRESIDENT = "President"
    SECRETARY = "Secretary"
    TREASURER = "Treasurer"
    VICE_PRESIDENT = "Vice President"
    VICE_SECRETARY = "Vice Secretary"
    IT_COORDINATOR = "IT Coordinator"
    EDITOR = "Editor"
    ORGANIZER = "Organizer"
    COMMITTEE_MEMBER = "Committee Member"

    @property
    def tier(self) -> int:
        return POSITION_TIERS[self]

    @classmethod
    def parse(cls, title: str | None) -> Position | None:
        try:
            return cls((title or "").strip())
        except ValueError:
            return None


POSITION_TIERS: dict[Position, int] = {
    Position.SENIOR_TREASURER: 1,
    Position.PRESIDENT: 2,
    Position.SECRETARY: 2,
    Position.TREASURER: 2,
    Position.VICE_PRESIDENT: 2,
    Position.VICE_SECRETARY: 2,
    Position.IT_COORDINATOR: 3,
    Position.EDITOR: 3,
    Position.ORGANIZER: 3,
    Position.COMMITTEE_MEMBER: 4,
}

TIER_LABELS = {
    1: "Senior Treasurer",
    2: "Executive Board",
    3: "Coordinators",
    4: "Committee Members",
}


def position_tier(title: str | None) -> int | None:
    position = Position.parse(title)
    return position.tier if position is not None else None


@dataclass
class OrgChart:
    tiers: dict[int, list[dict]] = field(default_factory=lambda: {t: [] for t in range(1, TIER_COUNT + 1)})
    unassigned: list[dict] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "tiers": [
                {"tier": tier, "label": TIER_LABELS[tier], "members": members}
                for tier, members in sorted(self.tiers.items())
            ],
            "unassigned": self.unassigned,
        }


def build_org_chart(members: Iterable[dict]) -> OrgChart:
    """
    Partition members into tiers, each ordered by `display_order`.

    The sort is stable, so members sharing a display order keep the order
    they were given in (insertion order when rows come sorted by creation).
    """
    chart = OrgChart()
    ordered = sorted(members, key=lambda m: int(m.get("display_order") or 0))
    for member in ordered:
        tier = position_tier(member.get("position"))
        if tier is None:
            chart.unassigned.append(member)
        else:
            chart.tiers[tier].append(member)
    return chart
