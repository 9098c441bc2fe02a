"""Models for the Weapon Calculator.

This module defines the enumerations and dataclasses shared by the decoder,
codec, calculator and search layers.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Mapping


class Attribute(str, Enum):
    """Character attributes, in canonical order."""

    STR = "str"
    DEX = "dex"
    INT = "int"
    FAI = "fai"
    ARC = "arc"


class AttackPowerType(IntEnum):
    """Damage and status buildup types. Values double as regulation data keys."""

    PHYSICAL = 0
    MAGIC = 1
    FIRE = 2
    LIGHTNING = 3
    HOLY = 4
    POISON = 5
    SCARLET_ROT = 6
    BLEED = 7
    FROST = 8
    SLEEP = 9
    MADNESS = 10
    DEATH_BLIGHT = 11

    @property
    def is_damage(self) -> bool:
        return self <= AttackPowerType.HOLY

    @property
    def is_status(self) -> bool:
        return self > AttackPowerType.HOLY


class WeaponType(IntEnum):
    """Weapon categories keyed by the game's weapon type ID.

    Definition order is the canonical ordering used by the weapon codec;
    appending is safe, reordering is a breaking format change.
    """

    DAGGER = 1
    STRAIGHT_SWORD = 3
    GREATSWORD = 5
    COLOSSAL_SWORD = 7
    CURVED_SWORD = 9
    CURVED_GREATSWORD = 11
    KATANA = 13
    TWINBLADE = 14
    THRUSTING_SWORD = 15
    HEAVY_THRUSTING_SWORD = 16
    AXE = 17
    GREATAXE = 19
    HAMMER = 21
    GREAT_HAMMER = 23
    FLAIL = 24
    SPEAR = 25
    GREAT_SPEAR = 28
    HALBERD = 29
    REAPER = 31
    FIST = 35
    CLAW = 37
    WHIP = 39
    COLOSSAL_WEAPON = 41
    LIGHT_BOW = 50
    BOW = 51
    GREATBOW = 53
    CROSSBOW = 55
    BALLISTA = 56
    GLINTSTONE_STAFF = 57
    DUAL_CATALYST = 59
    SACRED_SEAL = 61
    SMALL_SHIELD = 65
    MEDIUM_SHIELD = 67
    GREATSHIELD = 69
    TORCH = 87
    HAND_TO_HAND = 88
    PERFUME_BOTTLE = 89
    THRUSTING_SHIELD = 90
    THROWING_BLADE = 91
    BACKHAND_BLADE = 92
    LIGHT_GREATSWORD = 93
    GREAT_KATANA = 94
    BEAST_CLAW = 95

    @property
    def label(self) -> str:
        return self.name.replace("_", " ").title()


ALL_ATTRIBUTES: tuple[Attribute, ...] = tuple(Attribute)
ALL_ATTACK_POWER_TYPES: tuple[AttackPowerType, ...] = tuple(AttackPowerType)
ALL_DAMAGE_TYPES: tuple[AttackPowerType, ...] = tuple(t for t in AttackPowerType if t.is_damage)
ALL_STATUS_TYPES: tuple[AttackPowerType, ...] = tuple(t for t in AttackPowerType if t.is_status)

# Character attribute values, always holding all five attributes
Attributes = Mapping[Attribute, int]


@dataclass(slots=True, frozen=True)
class Weapon:
    """A fully denormalized weapon with stats for every upgrade level.

    Attributes:
        name: Full display name, e.g. 'Heavy Nightrider Glaive'.
        weapon_name: Base weapon family name, e.g. 'Nightrider Glaive'.
        affinity_id: Affinity (infusion) id. 0 is Standard, -1 is Unique.
        weapon_type: Weapon category.
        weight: Equip weight.
        max_upgrade_level: Highest reinforcement level; per-level tuples have
            max_upgrade_level + 1 entries.
        requirements: Minimum attribute values to wield the weapon effectively.
        attack: Per upgrade level, base attack power and status buildup.
        attribute_scaling: Per upgrade level, scaling coefficient per attribute.
        attack_element_correct: Which attributes each attack power type scales with.
        scaling_curves: Scaling curve variant id per attack power type.
        paired: True if the weapon never gets the two-handing strength bonus.
        sorcery_tool: True if the weapon can cast sorceries.
        incantation_tool: True if the weapon can cast incantations.
        dlc: True if the weapon comes from the expansion.
    """

    name: str
    weapon_name: str
    affinity_id: int
    weapon_type: WeaponType
    max_upgrade_level: int
    requirements: dict[Attribute, int]
    attack: tuple[dict[AttackPowerType, float], ...]
    attribute_scaling: tuple[dict[Attribute, float], ...]
    attack_element_correct: dict[AttackPowerType, tuple[Attribute, ...]]
    scaling_curves: dict[AttackPowerType, int]
    weight: float = 0.0
    paired: bool = False
    sorcery_tool: bool = False
    incantation_tool: bool = False
    dlc: bool = False

    def __repr__(self) -> str:
        return (
            f"Weapon(name='{self.name}', affinity_id={self.affinity_id}, "
            f"weapon_type={self.weapon_type.name}, max_upgrade_level={self.max_upgrade_level})"
        )


@dataclass(slots=True, frozen=True)
class AttackPower:
    """Attack power for one damage or status type."""

    base: float
    scaling: float

    @property
    def total(self) -> float:
        return self.base + self.scaling


@dataclass(slots=True, frozen=True)
class AttackResult:
    """Output of the attack power calculator for one weapon at one upgrade level.

    Attributes:
        upgrade_level: Upgrade level the result was computed at.
        attack_power: Attack power per type the weapon has; absent types are omitted.
        spell_scaling: Spell scaling per damage type for catalysts.
        ineffective_attributes: Attributes below the weapon's requirement.
        attributes: The attribute values used, after the two-handing adjustment.
    """

    upgrade_level: int
    attack_power: dict[AttackPowerType, AttackPower]
    spell_scaling: dict[AttackPowerType, float] = field(default_factory=dict)
    ineffective_attributes: tuple[Attribute, ...] = ()
    attributes: dict[Attribute, int] = field(default_factory=dict)

    @property
    def total_attack(self) -> float:
        """Sum of base + scaling over the damage types (status buildup excluded)."""
        return sum(
            ap.total for t, ap in self.attack_power.items() if t.is_damage
        )

    def attack_of(self, attack_power_type: AttackPowerType) -> float:
        ap = self.attack_power.get(attack_power_type)
        return ap.total if ap is not None else 0.0


@dataclass(slots=True, frozen=True)
class WeaponRow:
    """A weapon paired with its computed attack, as displayed in a result table."""

    weapon: Weapon
    result: AttackResult
