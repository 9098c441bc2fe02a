# ===== Built-in defaults (calculation constants and lookup tables) =====

import os

from .models import AttackPowerType, WeaponType

# Attribute bounds accepted from users
MIN_ATTRIBUTE_VALUE = 1
MAX_ATTRIBUTE_VALUE = 99

# Fraction of base attack subtracted when a scaling requirement is not met
DEFAULT_INEFFECTIVE_ATTRIBUTE_PENALTY = 0.4

# Strength multiplier when two-handing
TWO_HANDING_STRENGTH_MULTIPLIER = 1.5

# Upgrade paths: regular (smithing stones) and special (somber stones)
MAX_REGULAR_UPGRADE_LEVEL = 25
MAX_SPECIAL_UPGRADE_LEVEL = 10

# Scaling curve ids used when a weapon does not specify one
DEFAULT_DAMAGE_CURVE_ID = 0
DEFAULT_STATUS_CURVE_ID = 6

# Highest attribute value a curve is evaluated for (99 strength two-handed)
MAX_CURVE_ATTRIBUTE_VALUE = 148

# Spell scaling is reported relative to a base of 100
SPELL_SCALING_BASE = 100.0

# Affinity sentinels
STANDARD_AFFINITY_ID = 0
UNIQUE_AFFINITY_ID = -1

# Affinity ids known to any dataset, in codec order
AFFINITY_ORDER: tuple[int, ...] = tuple(range(UNIQUE_AFFINITY_ID, 24))

# Status types that scale with arcane for every weapon
ARCANE_STATUS_TYPES: tuple[AttackPowerType, ...] = (
    AttackPowerType.POISON,
    AttackPowerType.BLEED,
    AttackPowerType.MADNESS,
    AttackPowerType.SLEEP,
)

# Weapons that can only be two-handed always get the strength bonus
TWO_HANDED_ONLY_WEAPON_TYPES: frozenset[WeaponType] = frozenset(
    {
        WeaponType.LIGHT_BOW,
        WeaponType.BOW,
        WeaponType.GREATBOW,
        WeaponType.BALLISTA,
    }
)

# Categories that can never take an affinity; they show up under Standard/Unique
UNINFUSABLE_WEAPON_TYPES: frozenset[WeaponType] = frozenset(
    {
        WeaponType.LIGHT_BOW,
        WeaponType.BOW,
        WeaponType.GREATBOW,
        WeaponType.CROSSBOW,
        WeaponType.BALLISTA,
        WeaponType.GLINTSTONE_STAFF,
        WeaponType.DUAL_CATALYST,
        WeaponType.SACRED_SEAL,
        WeaponType.TORCH,
        WeaponType.PERFUME_BOTTLE,
    }
)

# Vanilla affinity names
AFFINITY_OPTIONS: dict[int, str] = {
    0: "Standard",
    1: "Heavy",
    2: "Keen",
    3: "Quality",
    8: "Magic",
    4: "Fire",
    5: "Flame Art",
    6: "Lightning",
    7: "Sacred",
    9: "Cold",
    10: "Poison",
    11: "Blood",
    12: "Occult",
    -1: "Unique",
}

# Elden Ring Reforged affinity names
REFORGED_AFFINITY_OPTIONS: dict[int, str] = {
    0: "Standard",
    1: "Heavy",
    2: "Keen",
    3: "Quality",
    8: "Magic",
    16: "Magma",
    5: "Fell",
    13: "Bolt",
    7: "Sacred",
    19: "Night",
    4: "Fire",
    6: "Lightning",
    21: "Blessed",
    10: "Poison",
    11: "Blood",
    12: "Occult",
    22: "Bestial",
    20: "Gravitational",
    17: "Rotten",
    18: "Cursed",
    9: "Cold",
    14: "Soporific",
    15: "Frenzied",
    23: "Fated",
    -1: "Unique",
}

# The Convergence affinity names
CONVERGENCE_AFFINITY_OPTIONS: dict[int, str] = {
    0: "Standard",
    1: "Heavy",
    2: "Keen",
    3: "Quality",
    4: "Glint",
    5: "Dragonkin",
    6: "Gravity",
    7: "Flame",
    8: "Golden",
    9: "Draconic",
    10: "Bestial",
    11: "Night",
    12: "Lava",
    13: "Frenzy",
    14: "Death",
    15: "Godslayer",
    16: "Frost",
    17: "Aberrant",
    18: "Bloodflame",
    19: "Rotten",
    20: "Storm",
    21: "Mystic",
    -1: "Unique",
}

# ===== Environment =====

# Directory holding regulation-*.json files
REGULATION_DATA_DIR: str = os.getenv("REGULATION_DATA_DIR", "data")

# Optional base URL; when set, datasets are fetched over HTTP instead of disk
REGULATION_BASE_URL: str = os.getenv("REGULATION_BASE_URL", "")
