"""Compact wire format for decoded weapons.

The weapon list is sent as ``[string_table, records]``. Each record is a
fixed-position list:

    0  name               index into the string table
    1  weight
    2  max upgrade level
    3  base weapon name   index into the string table
    4  affinity           index into AFFINITY_ORDER
    5  weapon type        index into WEAPON_TYPE_ORDER
    6  requirements       [per attribute]
    7  attack             [per upgrade level][per damage type]
    8  attribute scaling  [per upgrade level][per attribute]
    9  scaling attributes [per attack power type][attribute indexes]
    10 scaling curves     [per attack power type], -1 when absent
    11 status buildup     [per upgrade level][per status type]   (optional)
    12 flags              bit mask of WEAPON_FLAGS               (optional)

Mappings are written as arrays in canonical key order with absent entries
replaced by a default (0, -1 or []), and trailing defaults dropped. Decoders
accept shorter arrays and never materialize default entries.
"""

from __future__ import annotations

from typing import Any, Callable, Mapping, Sequence, TypeVar

from .defaults import AFFINITY_ORDER
from .errors import CodecError
from .models import (
    ALL_ATTACK_POWER_TYPES,
    ALL_ATTRIBUTES,
    ALL_DAMAGE_TYPES,
    ALL_STATUS_TYPES,
    AttackPowerType,
    Attribute,
    Weapon,
    WeaponType,
)

K = TypeVar("K")
V = TypeVar("V")

# Shared between encoder and decoder; reordering is a breaking format change
WEAPON_TYPE_ORDER: tuple[WeaponType, ...] = tuple(WeaponType)
WEAPON_FLAGS: tuple[str, ...] = ("paired", "sorcery_tool", "incantation_tool", "dlc")

NO_CURVE = -1

EncodedWeapon = list[Any]
EncodedWeaponList = list[Any]


# ----------------------------- helpers -----------------------------


def encode_map(
    obj: Mapping[K, V],
    all_keys: Sequence[K],
    default: V,
    encode_value: Callable[[V], Any] = lambda v: v,
) -> list[Any]:
    """Write a sparse mapping as a dense array in key order, trimming trailing defaults."""
    arr = [obj.get(key, default) for key in all_keys]
    while arr and arr[-1] == default:
        arr.pop()
    return [encode_value(v) for v in arr]


def decode_map(
    arr: Sequence[Any],
    all_keys: Sequence[K],
    is_default: Callable[[Any], bool],
    decode_value: Callable[[Any], V] = lambda v: v,
) -> dict[K, V]:
    """Inverse of encode_map. Default-valued entries are left out."""
    if len(arr) > len(all_keys):
        raise CodecError(f"Array of length {len(arr)} exceeds {len(all_keys)} known keys")
    return {all_keys[i]: decode_value(v) for i, v in enumerate(arr) if not is_default(v)}


def _index_of(value: Any, ordering: Sequence[Any], what: str) -> int:
    try:
        return ordering.index(value)
    except ValueError:
        raise CodecError(f"Cannot encode unknown {what}: {value!r}") from None


def _lookup(idx: Any, ordering: Sequence[V], what: str) -> V:
    if not isinstance(idx, int) or not 0 <= idx < len(ordering):
        raise CodecError(f"Unknown {what} index: {idx!r}")
    return ordering[idx]


def _is_zero(v: Any) -> bool:
    return v == 0


def _attribute_indexes(attributes: Sequence[Attribute]) -> list[int]:
    return [ALL_ATTRIBUTES.index(a) for a in attributes]


def _attributes_from_indexes(indexes: Sequence[int]) -> tuple[Attribute, ...]:
    return tuple(_lookup(i, ALL_ATTRIBUTES, "attribute") for i in indexes)


class StringTable:
    """Deduplicating string table built while encoding."""

    def __init__(self) -> None:
        self.strings: list[str] = []
        self._indexes: dict[str, int] = {}

    def index(self, s: str) -> int:
        idx = self._indexes.get(s)
        if idx is None:
            idx = self._indexes[s] = len(self.strings)
            self.strings.append(s)
        return idx


# ----------------------------- weapons -----------------------------


def encode_weapon(weapon: Weapon, strings: StringTable) -> EncodedWeapon:
    """Encode one weapon into a compact record, adding its names to the string table."""
    statuses = [encode_map(level, ALL_STATUS_TYPES, 0) for level in weapon.attack]
    while statuses and not statuses[-1]:
        statuses.pop()
    flags = sum(1 << bit for bit, flag in enumerate(WEAPON_FLAGS) if getattr(weapon, flag))

    record: EncodedWeapon = [
        strings.index(weapon.name),
        weapon.weight,
        weapon.max_upgrade_level,
        strings.index(weapon.weapon_name),
        _index_of(weapon.affinity_id, AFFINITY_ORDER, "affinity"),
        _index_of(weapon.weapon_type, WEAPON_TYPE_ORDER, "weapon type"),
        encode_map(weapon.requirements, ALL_ATTRIBUTES, 0),
        [encode_map(level, ALL_DAMAGE_TYPES, 0) for level in weapon.attack],
        [encode_map(level, ALL_ATTRIBUTES, 0) for level in weapon.attribute_scaling],
        encode_map(weapon.attack_element_correct, ALL_ATTACK_POWER_TYPES, (), _attribute_indexes),
        encode_map(weapon.scaling_curves, ALL_ATTACK_POWER_TYPES, NO_CURVE),
        statuses,
        flags,
    ]

    # Optional trailing fields
    if not flags:
        record.pop()
        if not statuses:
            record.pop()
    return record


def decode_weapon(record: Sequence[Any], strings: Sequence[str]) -> Weapon:
    """Decode a compact record back into a Weapon."""
    if len(record) < 11:
        raise CodecError(f"Weapon record has {len(record)} fields, expected at least 11")

    (
        name_idx,
        weight,
        max_upgrade_level,
        weapon_name_idx,
        affinity_idx,
        weapon_type_idx,
        requirements,
        attack,
        attribute_scaling,
        scaling_attributes,
        scaling_curves,
    ) = record[:11]
    statuses = record[11] if len(record) > 11 else []
    flags = record[12] if len(record) > 12 else 0

    level_count = int(max_upgrade_level) + 1
    if len(attack) != level_count or len(attribute_scaling) != level_count:
        raise CodecError(f"Expected {level_count} upgrade levels in weapon record")
    if len(statuses) > level_count:
        raise CodecError(f"Status buildup has more than {level_count} upgrade levels")

    attack_by_level: list[dict[AttackPowerType, float]] = []
    for upgrade_level, damage in enumerate(attack):
        attack_at_level = decode_map(damage, ALL_DAMAGE_TYPES, _is_zero)
        if upgrade_level < len(statuses):
            attack_at_level.update(decode_map(statuses[upgrade_level], ALL_STATUS_TYPES, _is_zero))
        attack_by_level.append(attack_at_level)

    return Weapon(
        name=_lookup(name_idx, strings, "string"),
        weapon_name=_lookup(weapon_name_idx, strings, "string"),
        affinity_id=_lookup(affinity_idx, AFFINITY_ORDER, "affinity"),
        weapon_type=_lookup(weapon_type_idx, WEAPON_TYPE_ORDER, "weapon type"),
        weight=weight,
        max_upgrade_level=int(max_upgrade_level),
        requirements=decode_map(requirements, ALL_ATTRIBUTES, _is_zero),
        attack=tuple(attack_by_level),
        attribute_scaling=tuple(decode_map(level, ALL_ATTRIBUTES, _is_zero) for level in attribute_scaling),
        attack_element_correct=decode_map(
            scaling_attributes,
            ALL_ATTACK_POWER_TYPES,
            lambda indexes: len(indexes) == 0,
            _attributes_from_indexes,
        ),
        scaling_curves=decode_map(scaling_curves, ALL_ATTACK_POWER_TYPES, lambda c: c == NO_CURVE),
        **{flag: bool(flags & (1 << bit)) for bit, flag in enumerate(WEAPON_FLAGS)},
    )


def encode_weapons(weapons: Sequence[Weapon]) -> EncodedWeaponList:
    """Encode a weapon list into the ``[string_table, records]`` wire format."""
    strings = StringTable()
    records = [encode_weapon(weapon, strings) for weapon in weapons]
    return [strings.strings, records]


def decode_weapons(payload: Sequence[Any]) -> list[Weapon]:
    """Decode the ``[string_table, records]`` wire format."""
    if not isinstance(payload, (list, tuple)) or len(payload) != 2:
        raise CodecError("Weapon list payload must be a [strings, records] pair")
    strings, records = payload
    return [decode_weapon(record, strings) for record in records]
