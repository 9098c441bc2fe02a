"""Attack power calculator.

For each damage or status type a weapon has at the chosen upgrade level:

    attack = base * (1 + multiplier)

where the multiplier is the sum, over the attributes that type scales with,
of ``curve(attribute value) * attribute scaling``. If any of those attributes
is below the weapon's requirement the multiplier is replaced by a flat
penalty (-0.4 by default) instead.
"""

from __future__ import annotations

import math
from typing import Mapping

from .defaults import (
    DEFAULT_INEFFECTIVE_ATTRIBUTE_PENALTY,
    MAX_REGULAR_UPGRADE_LEVEL,
    MAX_SPECIAL_UPGRADE_LEVEL,
    SPELL_SCALING_BASE,
    TWO_HANDED_ONLY_WEAPON_TYPES,
    TWO_HANDING_STRENGTH_MULTIPLIER,
)
from .models import (
    ALL_ATTACK_POWER_TYPES,
    ALL_DAMAGE_TYPES,
    AttackPower,
    AttackPowerType,
    AttackResult,
    Attribute,
    Attributes,
    Weapon,
)
from .scaling_curves import BUILTIN_CURVES, CurveTable


def adjust_attributes_for_two_handing(
    attributes: Attributes,
    weapon: Weapon,
    *,
    two_handing: bool = False,
) -> dict[Attribute, int]:
    """Apply the 50% strength bonus for two-handing, if this weapon gets it.

    Paired weapons never get the bonus; bows and ballistae always do.
    """
    two_handing_bonus = two_handing and not weapon.paired
    if weapon.weapon_type in TWO_HANDED_ONLY_WEAPON_TYPES:
        two_handing_bonus = True

    adjusted = dict(attributes)
    if two_handing_bonus:
        adjusted[Attribute.STR] = math.floor(attributes[Attribute.STR] * TWO_HANDING_STRENGTH_MULTIPLIER)
    return adjusted


def get_ineffective_attributes(weapon: Weapon, attributes: Attributes) -> tuple[Attribute, ...]:
    """Attributes whose value is below the weapon's requirement."""
    return tuple(
        attribute
        for attribute, requirement in weapon.requirements.items()
        if attributes[attribute] < requirement
    )


def spell_scaling_types(weapon: Weapon, *, split_spell_scaling: bool = False) -> tuple[AttackPowerType, ...]:
    """Damage types a catalyst reports spell scaling for."""
    if not (weapon.sorcery_tool or weapon.incantation_tool):
        return ()
    if split_spell_scaling:
        return ALL_DAMAGE_TYPES
    types = []
    if weapon.sorcery_tool:
        types.append(AttackPowerType.MAGIC)
    if weapon.incantation_tool:
        types.append(AttackPowerType.HOLY)
    return tuple(types)


def compute_attack(
    weapon: Weapon,
    upgrade_level: int,
    attributes: Attributes,
    *,
    curves: CurveTable = BUILTIN_CURVES,
    two_handing: bool = False,
    disable_two_handing_attack_power_bonus: bool = False,
    ineffective_attribute_penalty: float = DEFAULT_INEFFECTIVE_ATTRIBUTE_PENALTY,
    split_spell_scaling: bool = False,
) -> AttackResult:
    """Determine the attack power of a weapon with the given character attributes.

    Args:
        weapon: Decoded weapon.
        upgrade_level: Upgrade level, 0..weapon.max_upgrade_level.
        attributes: Character attribute values (all five attributes).
        curves: Curve table of the weapon's regulation version.
        two_handing: Whether the character two-hands the weapon.
        disable_two_handing_attack_power_bonus: Two-handing still helps meet
            requirements, but scaling uses the unadjusted strength.
        ineffective_attribute_penalty: Fraction of base attack lost when a
            scaling requirement is not met.
        split_spell_scaling: Report spell scaling for every damage type.

    Returns:
        AttackResult with one entry per attack power type the weapon has.
    """
    if not 0 <= upgrade_level <= weapon.max_upgrade_level:
        raise ValueError(
            f"Upgrade level {upgrade_level} out of range 0..{weapon.max_upgrade_level} for {weapon.name}"
        )

    adjusted = adjust_attributes_for_two_handing(attributes, weapon, two_handing=two_handing)
    ineffective = get_ineffective_attributes(weapon, adjusted)
    spell_types = spell_scaling_types(weapon, split_spell_scaling=split_spell_scaling)

    base_attack = weapon.attack[upgrade_level]
    attribute_scaling = weapon.attribute_scaling[upgrade_level]

    attack_power: dict[AttackPowerType, AttackPower] = {}
    spell_scaling: dict[AttackPowerType, float] = {}
    for attack_power_type in ALL_ATTACK_POWER_TYPES:
        base = base_attack.get(attack_power_type, 0.0)
        is_spell_scaling = attack_power_type in spell_types
        if not base and not is_spell_scaling:
            continue

        scaling_attributes = weapon.attack_element_correct.get(attack_power_type, ())
        if any(attribute in ineffective for attribute in scaling_attributes):
            # One unmet requirement replaces the whole bonus with a single penalty
            multiplier = -ineffective_attribute_penalty
        else:
            effective = (
                adjusted
                if attack_power_type.is_damage and not disable_two_handing_attack_power_bonus
                else attributes
            )
            multiplier = _scaling_multiplier(
                weapon.scaling_curves.get(attack_power_type),
                scaling_attributes,
                attribute_scaling,
                effective,
                curves,
            )

        if base:
            attack_power[attack_power_type] = AttackPower(base=base, scaling=base * multiplier)
        if is_spell_scaling:
            spell_scaling[attack_power_type] = SPELL_SCALING_BASE * (1 + multiplier)

    return AttackResult(
        upgrade_level=upgrade_level,
        attack_power=attack_power,
        spell_scaling=spell_scaling,
        ineffective_attributes=ineffective,
        attributes=adjusted,
    )


def _scaling_multiplier(
    curve_id: int | None,
    scaling_attributes: tuple[Attribute, ...],
    attribute_scaling: Mapping[Attribute, float],
    attributes: Attributes,
    curves: CurveTable,
) -> float:
    if curve_id is None:
        return 0.0
    multiplier = 0.0
    for attribute in scaling_attributes:
        scaling = attribute_scaling.get(attribute)
        if scaling:
            multiplier += curves.coefficient(curve_id, attributes[attribute]) * scaling
    return multiplier


# ----------------------------- upgrade levels -----------------------------


def to_special_upgrade_level(
    regular_upgrade_level: int,
    *,
    max_regular_upgrade_level: int = MAX_REGULAR_UPGRADE_LEVEL,
    max_special_upgrade_level: int = MAX_SPECIAL_UPGRADE_LEVEL,
) -> int:
    """Somber upgrade level closest to a regular one, rounding down between levels."""
    level = math.floor(
        (regular_upgrade_level + 0.5) * max_special_upgrade_level / max_regular_upgrade_level
    )
    return max(0, min(max_special_upgrade_level, level))


def to_regular_upgrade_level(
    special_upgrade_level: int,
    *,
    max_regular_upgrade_level: int = MAX_REGULAR_UPGRADE_LEVEL,
    max_special_upgrade_level: int = MAX_SPECIAL_UPGRADE_LEVEL,
) -> int:
    return math.floor(special_upgrade_level * max_regular_upgrade_level / max_special_upgrade_level)


def weapon_upgrade_level(
    weapon: Weapon,
    regular_upgrade_level: int,
    *,
    max_regular_upgrade_level: int = MAX_REGULAR_UPGRADE_LEVEL,
) -> int:
    """Upgrade level to show a weapon at when the user picks a regular upgrade level."""
    regular_upgrade_level = max(0, min(max_regular_upgrade_level, regular_upgrade_level))
    if weapon.max_upgrade_level >= max_regular_upgrade_level:
        return regular_upgrade_level
    return to_special_upgrade_level(
        regular_upgrade_level,
        max_regular_upgrade_level=max_regular_upgrade_level,
        max_special_upgrade_level=weapon.max_upgrade_level,
    )


def scaling_grade(scaling: float) -> str:
    """Letter grade shown in game for an attribute scaling coefficient."""
    if scaling > 1.75:
        return "S"
    if scaling >= 1.4:
        return "A"
    if scaling >= 0.9:
        return "B"
    if scaling >= 0.6:
        return "C"
    if scaling >= 0.25:
        return "D"
    if scaling > 0:
        return "E"
    return "-"
