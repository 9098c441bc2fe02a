"""One-off corrections for individual weapons whose upstream data is wrong.

Each entry fixes a single known upstream data bug. They are not a pattern to
generalize from; add an entry only for a confirmed in-game discrepancy.
"""

from __future__ import annotations

from typing import Callable

from .models import AttackPowerType

# Weapon name -> status slots (0..2) whose per-level spEffect offset is ignored.
# The Antspur Rapier's innate scarlet rot does not grow with upgrades even though
# its reinforcement table advances the offset for that slot.
STATUS_OFFSET_SUPPRESSIONS: dict[str, frozenset[int]] = {
    "Antspur Rapier": frozenset({0}),
}


def _cold_antspur_rapier(upgrade_level: int) -> dict[AttackPowerType, float | None]:
    # Gains scarlet rot up to +5, then loses it from +6 onwards
    if upgrade_level < 6:
        return {AttackPowerType.SCARLET_ROT: 50.0 + 5.0 * upgrade_level}
    return {AttackPowerType.SCARLET_ROT: None}


# Weapon name -> function of upgrade level returning status buildup to force.
# A value of None removes that status at that level.
STATUS_BUILDUP_OVERRIDES: dict[str, Callable[[int], dict[AttackPowerType, float | None]]] = {
    "Cold Antspur Rapier": _cold_antspur_rapier,
}


def suppressed_status_slots(weapon_name: str) -> frozenset[int]:
    return STATUS_OFFSET_SUPPRESSIONS.get(weapon_name, frozenset())


def apply_status_override(
    weapon_name: str,
    upgrade_level: int,
    attack: dict[AttackPowerType, float],
) -> None:
    """Apply a manual status buildup fix in place, if one exists for this weapon."""
    override = STATUS_BUILDUP_OVERRIDES.get(weapon_name)
    if override is None:
        return
    for status_type, value in override(upgrade_level).items():
        if value is None:
            attack.pop(status_type, None)
        else:
            attack[status_type] = value
