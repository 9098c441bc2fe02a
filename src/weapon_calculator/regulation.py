"""Regulation data decoder.

A regulation dataset is the compact JSON form of one game version's balance
tables. Weapons in it reference shared tables by integer id:

  - calcCorrectGraphs     : curve id -> list of {maxVal, maxGrowVal, adjPt}
  - attackElementCorrects : rule id -> {attack power type -> {attribute -> true}}
  - reinforceTypes        : reinforce id -> per-level {attack, attributeScaling,
                            statusSpEffectId1..3}
  - statusSpEffectParams  : spEffect id -> {attack power type -> buildup}
  - weapons               : list of compact weapon records

Decoding expands every weapon into a denormalized Weapon with per-upgrade-level
attack and scaling. A missing element-correct or reinforce entry aborts the
whole dataset; missing curves or status params only drop that contribution.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Any, Mapping, TYPE_CHECKING

from . import corrections
from .defaults import (
    AFFINITY_ORDER,
    ARCANE_STATUS_TYPES,
    DEFAULT_DAMAGE_CURVE_ID,
    DEFAULT_STATUS_CURVE_ID,
)
from .errors import RegulationDataError
from .models import (
    ALL_ATTACK_POWER_TYPES,
    ALL_ATTRIBUTES,
    AttackPowerType,
    Attribute,
    Weapon,
    WeaponType,
)
from .scaling_curves import BUILTIN_CURVES, CurveTable, parse_curve_stages

if TYPE_CHECKING:
    from logging import Logger


@dataclass(slots=True, frozen=True)
class ReinforceLevel:
    """Multipliers applied to a weapon's unupgraded stats at one upgrade level."""

    attack: dict[AttackPowerType, float]
    attribute_scaling: dict[Attribute, float]
    status_offsets: tuple[int, int, int] = (0, 0, 0)


@dataclass(slots=True, frozen=True)
class Regulation:
    """A decoded regulation dataset: its weapons and the curves they reference."""

    weapons: tuple[Weapon, ...]
    curves: CurveTable


# ----------------------------- table parsing -----------------------------


def _parse_attack_element_corrects(
    raw: Mapping[str, Any],
) -> dict[int, dict[AttackPowerType, tuple[Attribute, ...]]]:
    out: dict[int, dict[AttackPowerType, tuple[Attribute, ...]]] = {}
    for rule_id, by_type in raw.items():
        rule: dict[AttackPowerType, tuple[Attribute, ...]] = {}
        for type_key, by_attribute in (by_type or {}).items():
            scaling_attributes = tuple(a for a in ALL_ATTRIBUTES if (by_attribute or {}).get(a.value))
            if scaling_attributes:
                rule[AttackPowerType(int(type_key))] = scaling_attributes

        # Status scaling isn't stored per rule because it's the same for every weapon
        for status_type in ARCANE_STATUS_TYPES:
            rule[status_type] = (Attribute.ARC,)

        out[int(rule_id)] = rule
    return out


def _parse_reinforce_types(raw: Mapping[str, Any]) -> dict[int, list[ReinforceLevel]]:
    out: dict[int, list[ReinforceLevel]] = {}
    for reinforce_id, levels in raw.items():
        out[int(reinforce_id)] = [
            ReinforceLevel(
                attack={AttackPowerType(int(k)): float(v) for k, v in (lvl.get("attack") or {}).items()},
                attribute_scaling={
                    Attribute(k): float(v) for k, v in (lvl.get("attributeScaling") or {}).items()
                },
                status_offsets=(
                    int(lvl.get("statusSpEffectId1") or 0),
                    int(lvl.get("statusSpEffectId2") or 0),
                    int(lvl.get("statusSpEffectId3") or 0),
                ),
            )
            for lvl in levels or []
        ]
    return out


def _parse_status_params(raw: Mapping[str, Any]) -> dict[int, dict[AttackPowerType, float]]:
    return {
        int(sp_id): {AttackPowerType(int(k)): float(v) for k, v in (param or {}).items()}
        for sp_id, param in raw.items()
    }


# ----------------------------- decoding -----------------------------


class _Decoder:
    """Holds the parsed shared tables while the weapon list is expanded."""

    def __init__(
        self,
        data: Mapping[str, Any],
        *,
        curves: CurveTable,
        max_upgrade_level: int | None,
    ) -> None:
        self.max_upgrade_level = max_upgrade_level
        self.curves = curves.merged_with(
            {
                int(curve_id): parse_curve_stages(stages)
                for curve_id, stages in (data.get("calcCorrectGraphs") or {}).items()
                if stages
            }
        )
        self.attack_element_corrects = _parse_attack_element_corrects(
            data.get("attackElementCorrects") or {}
        )
        self.reinforce_types = _parse_reinforce_types(data.get("reinforceTypes") or {})
        self.status_params = _parse_status_params(data.get("statusSpEffectParams") or {})
        self.missing: Counter[str] = Counter()

    def decode_weapon(self, record: Mapping[str, Any]) -> Weapon:
        name = str(record["name"])

        rule_id = int(record["attackElementCorrectId"])
        attack_element_correct = self.attack_element_corrects.get(rule_id)
        if attack_element_correct is None:
            raise RegulationDataError("AttackElementCorrectParam", rule_id, name)

        reinforce_id = int(record["reinforceTypeId"])
        levels = self.reinforce_types.get(reinforce_id)
        if not levels:
            raise RegulationDataError("ReinforceParamWeapon", reinforce_id, name)
        if self.max_upgrade_level is not None:
            levels = levels[: self.max_upgrade_level + 1]

        try:
            weapon_type = WeaponType(int(record["weaponType"]))
        except ValueError:
            raise RegulationDataError("WeaponType", int(record["weaponType"]), name) from None

        affinity_id = int(record.get("affinityId", 0))
        if affinity_id not in AFFINITY_ORDER:
            raise RegulationDataError("Affinity", affinity_id, name)

        unupgraded_attack = [(AttackPowerType(int(t)), float(v)) for t, v in record.get("attack") or []]
        unupgraded_scaling = [(Attribute(a), float(v)) for a, v in record.get("attributeScaling") or []]
        status_ids = [int(sp_id or 0) for sp_id in record.get("statusSpEffectParamIds") or []]
        suppressed = corrections.suppressed_status_slots(name)

        attack: list[dict[AttackPowerType, float]] = []
        attribute_scaling: list[dict[Attribute, float]] = []
        for upgrade_level, level in enumerate(levels):
            attack_at_level: dict[AttackPowerType, float] = {}
            for attack_power_type, base in unupgraded_attack:
                value = base * level.attack.get(attack_power_type, 0.0)
                if value:
                    attack_at_level[attack_power_type] = value

            for slot, sp_id in enumerate(status_ids[:3]):
                if not sp_id:
                    continue
                offset = 0 if slot in suppressed else level.status_offsets[slot]
                param = self.status_params.get(sp_id + offset)
                if param is None:
                    self.missing["SpEffectParam"] += 1
                    continue
                attack_at_level.update((t, v) for t, v in param.items() if v)

            corrections.apply_status_override(name, upgrade_level, attack_at_level)
            attack.append(attack_at_level)

            scaling_at_level: dict[Attribute, float] = {}
            for attribute, scaling in unupgraded_scaling:
                value = scaling * level.attribute_scaling.get(attribute, 0.0)
                if value:
                    scaling_at_level[attribute] = value
            attribute_scaling.append(scaling_at_level)

        return Weapon(
            name=name,
            weapon_name=str(record.get("weaponName") or name),
            affinity_id=affinity_id,
            weapon_type=weapon_type,
            weight=float(record.get("weight") or 0.0),
            max_upgrade_level=len(levels) - 1,
            requirements={Attribute(a): int(v) for a, v in (record.get("requirements") or {}).items() if v},
            attack=tuple(attack),
            attribute_scaling=tuple(attribute_scaling),
            attack_element_correct=dict(attack_element_correct),
            scaling_curves=self._scaling_curves(record.get("calcCorrectGraphIds") or {}),
            paired=bool(record.get("paired", False)),
            sorcery_tool=bool(record.get("sorceryTool", False)),
            incantation_tool=bool(record.get("incantationTool", False)),
            dlc=bool(record.get("dlc", False)),
        )

    def _scaling_curves(self, curve_ids: Mapping[str, Any]) -> dict[AttackPowerType, int]:
        out: dict[AttackPowerType, int] = {}
        for attack_power_type in ALL_ATTACK_POWER_TYPES:
            default = DEFAULT_DAMAGE_CURVE_ID if attack_power_type.is_damage else DEFAULT_STATUS_CURVE_ID
            curve_id = curve_ids.get(str(int(attack_power_type)))
            curve_id = default if curve_id is None else int(curve_id)
            if curve_id in self.curves:
                out[attack_power_type] = curve_id
            else:
                self.missing["CalcCorrectGraph"] += 1
        return out


def decode_regulation_data(
    data: Mapping[str, Any],
    *,
    curves: CurveTable = BUILTIN_CURVES,
    max_upgrade_level: int | None = None,
    logger: "Logger | None" = None,
) -> Regulation:
    """Decode a regulation dataset into denormalized weapons.

    Args:
        data: Parsed regulation JSON.
        curves: Base curve table; dataset curves are layered on top of it.
        max_upgrade_level: Optional cap on upgrade levels (mod overrides).
        logger: Optional logger for degraded-data diagnostics.

    Returns:
        The decoded Regulation.

    Raises:
        RegulationDataError: a weapon references a missing element-correct or
            reinforce entry, or an unknown weapon type.
    """
    decoder = _Decoder(data, curves=curves, max_upgrade_level=max_upgrade_level)
    weapons = tuple(decoder.decode_weapon(record) for record in data.get("weapons") or [])

    if logger:
        for table, count in decoder.missing.items():
            logger.debug(f"⚠️ {count} missing {table} references (no bonus applied)")
        logger.info(f"✅ Decoded {len(weapons)} weapons.")

    return Regulation(weapons=weapons, curves=decoder.curves)
