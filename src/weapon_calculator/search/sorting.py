"""Sorting of computed weapon rows.

Names sort alphabetically; every numeric key sorts highest first. ``reverse``
flips the resulting order. Ties keep their input order.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Sequence

from ..models import AttackPowerType, Attribute, WeaponRow


class SortKey(str, Enum):
    NAME = "name"
    TOTAL_ATTACK = "total"
    ATTACK = "attack"
    STATUS = "status"
    SPELL_SCALING = "spell"
    SCALING = "scaling"
    REQUIREMENT = "requirement"


@dataclass(slots=True, frozen=True)
class SortBy:
    """A sort key plus the attack power type or attribute it applies to, if any."""

    key: SortKey
    attack_power_type: AttackPowerType | None = None
    attribute: Attribute | None = None

    def __post_init__(self) -> None:
        if self.key in (SortKey.ATTACK, SortKey.STATUS, SortKey.SPELL_SCALING):
            if self.attack_power_type is None:
                raise ValueError(f"Sort key '{self.key.value}' needs an attack power type")
        if self.key in (SortKey.SCALING, SortKey.REQUIREMENT) and self.attribute is None:
            raise ValueError(f"Sort key '{self.key.value}' needs an attribute")

    def __str__(self) -> str:
        if self.attack_power_type is not None:
            return f"{self.key.value}:{self.attack_power_type.name.lower()}"
        if self.attribute is not None:
            return f"{self.key.value}:{self.attribute.value}"
        return self.key.value


def parse_sort_by(text: str) -> SortBy:
    """Parse 'name', 'total', 'attack:fire', 'status:bleed', 'spell:magic',
    'scaling:dex' or 'requirement:str'."""
    key_text, _, arg = text.strip().lower().partition(":")
    try:
        key = SortKey(key_text)
    except ValueError:
        raise ValueError(f"Unknown sort key: {key_text!r}") from None

    if key in (SortKey.ATTACK, SortKey.STATUS, SortKey.SPELL_SCALING):
        try:
            return SortBy(key, attack_power_type=AttackPowerType[arg.upper()])
        except KeyError:
            raise ValueError(f"Unknown attack power type: {arg!r}") from None
    if key in (SortKey.SCALING, SortKey.REQUIREMENT):
        try:
            return SortBy(key, attribute=Attribute(arg))
        except ValueError:
            raise ValueError(f"Unknown attribute: {arg!r}") from None
    return SortBy(key)


def _name_value(row: WeaponRow) -> str:
    # Zero-padded affinity keeps affinity variants of the same weapon together
    return f"{row.weapon.weapon_name},{row.weapon.affinity_id:04}"


def _numeric_value(sort_by: SortBy) -> Callable[[WeaponRow], float]:
    t, attribute = sort_by.attack_power_type, sort_by.attribute
    if sort_by.key is SortKey.TOTAL_ATTACK:
        return lambda row: row.result.total_attack
    if sort_by.key in (SortKey.ATTACK, SortKey.STATUS):
        return lambda row: row.result.attack_of(t)
    if sort_by.key is SortKey.SPELL_SCALING:
        return lambda row: row.result.spell_scaling.get(t, 0.0)
    if sort_by.key is SortKey.SCALING:
        return lambda row: row.weapon.attribute_scaling[row.result.upgrade_level].get(attribute, 0.0)
    if sort_by.key is SortKey.REQUIREMENT:
        return lambda row: row.weapon.requirements.get(attribute, 0)
    raise ValueError(f"Unsupported sort key: {sort_by.key}")  # pragma: no cover


def sort_weapons(rows: Sequence[WeaponRow], sort_by: SortBy, reverse: bool = False) -> list[WeaponRow]:
    """Sort rows by the given key. Does not modify the input."""
    if sort_by.key is SortKey.NAME:
        ordered = sorted(rows, key=_name_value)
    else:
        value = _numeric_value(sort_by)
        ordered = sorted(rows, key=lambda row: -value(row))

    if reverse:
        ordered.reverse()
    return ordered
