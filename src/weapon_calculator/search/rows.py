"""Filter, compute and sort a weapon list into result rows."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from ..calculator import compute_attack, weapon_upgrade_level
from ..models import Attributes, WeaponRow
from ..regulation import Regulation
from ..versions import RegulationVersion
from .filtering import FilterCriteria, filter_weapons
from .sorting import SortBy, SortKey, sort_weapons


@dataclass(slots=True, frozen=True)
class RowsResult:
    rows: list[WeaponRow]
    total: int


def build_weapon_rows(
    regulation: Regulation,
    version: RegulationVersion,
    *,
    attributes: Attributes,
    upgrade_level: int,
    criteria: FilterCriteria = FilterCriteria(),
    two_handing: bool = False,
    sort_by: SortBy = SortBy(SortKey.TOTAL_ATTACK),
    reverse: bool = False,
    offset: int = 0,
    limit: int | None = None,
) -> RowsResult:
    """Filter the weapons, compute attack for each at the chosen level, sort and paginate.

    ``upgrade_level`` is a regular-weapon level; somber weapons are shown at
    the closest equivalent level.
    """
    weapons = filter_weapons(regulation.weapons, criteria)
    options = version.calculation_options()

    rows = [
        WeaponRow(
            weapon=weapon,
            result=compute_attack(
                weapon,
                weapon_upgrade_level(
                    weapon, upgrade_level, max_regular_upgrade_level=version.max_regular_upgrade_level
                ),
                attributes,
                curves=regulation.curves,
                two_handing=two_handing,
                **options,
            ),
        )
        for weapon in weapons
    ]
    ordered = sort_weapons(rows, sort_by, reverse)
    return RowsResult(rows=paginate(ordered, offset, limit), total=len(ordered))


def paginate(rows: Sequence[WeaponRow], offset: int = 0, limit: int | None = None) -> list[WeaponRow]:
    offset = max(0, offset)
    end = None if limit is None else offset + max(0, limit)
    return list(rows[offset:end])
