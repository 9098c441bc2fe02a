"""Weapon filtering.

Each criterion is independent; an empty set or None means "no constraint".
Filtering never reorders the input.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from ..calculator import adjust_attributes_for_two_handing
from ..defaults import STANDARD_AFFINITY_ID, UNIQUE_AFFINITY_ID, UNINFUSABLE_WEAPON_TYPES
from ..models import Attributes, Weapon, WeaponType


@dataclass(slots=True, frozen=True)
class FilterCriteria:
    """What to keep from a weapon list.

    Attributes:
        weapon_types: Only include these weapon categories.
        affinity_ids: Only include weapons with one of these affinities.
        effective_with_attributes: Only include weapons whose requirements are
            met by these attribute values.
        two_handing: Apply the two-handing strength bonus before checking requirements.
        include_dlc: Include weapons from the expansion.
        max_weight: Only include weapons up to this weight.
    """

    weapon_types: frozenset[WeaponType] = frozenset()
    affinity_ids: frozenset[int] = frozenset()
    effective_with_attributes: Attributes | None = None
    two_handing: bool = False
    include_dlc: bool = True
    max_weight: float | None = None


def matches_weapon_type(weapon: Weapon, weapon_types: frozenset[WeaponType]) -> bool:
    if not weapon_types or weapon.weapon_type in weapon_types:
        return True
    # Hybrid catalysts (e.g. a sword that casts sorceries) count as staves/seals too
    if weapon.sorcery_tool and WeaponType.GLINTSTONE_STAFF in weapon_types:
        return True
    if weapon.incantation_tool and WeaponType.SACRED_SEAL in weapon_types:
        return True
    return False


def matches_affinity(weapon: Weapon, affinity_ids: frozenset[int]) -> bool:
    if not affinity_ids or weapon.affinity_id in affinity_ids:
        return True
    # Categories that can't be infused show up under Standard and Unique
    return weapon.weapon_type in UNINFUSABLE_WEAPON_TYPES and (
        STANDARD_AFFINITY_ID in affinity_ids or UNIQUE_AFFINITY_ID in affinity_ids
    )


def is_effective(weapon: Weapon, attributes: Attributes, *, two_handing: bool = False) -> bool:
    """True if every requirement of the weapon is met by the attributes."""
    adjusted = adjust_attributes_for_two_handing(attributes, weapon, two_handing=two_handing)
    return all(adjusted[attribute] >= requirement for attribute, requirement in weapon.requirements.items())


def filter_weapons(weapons: Iterable[Weapon], criteria: FilterCriteria) -> list[Weapon]:
    """Return the weapons matching every criterion, in input order."""

    def keep(weapon: Weapon) -> bool:
        if not matches_weapon_type(weapon, criteria.weapon_types):
            return False
        if not matches_affinity(weapon, criteria.affinity_ids):
            return False
        if not criteria.include_dlc and weapon.dlc:
            return False
        if criteria.max_weight is not None and weapon.weight > criteria.max_weight:
            return False
        if criteria.effective_with_attributes is not None and not is_effective(
            weapon, criteria.effective_with_attributes, two_handing=criteria.two_handing
        ):
            return False
        return True

    return [weapon for weapon in weapons if keep(weapon)]
