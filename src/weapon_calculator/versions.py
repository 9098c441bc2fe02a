"""Regulation versions: which dataset to load and which rule toggles apply."""

from __future__ import annotations

from dataclasses import dataclass, field

from .defaults import (
    AFFINITY_OPTIONS,
    CONVERGENCE_AFFINITY_OPTIONS,
    DEFAULT_INEFFECTIVE_ATTRIBUTE_PENALTY,
    MAX_REGULAR_UPGRADE_LEVEL,
    REFORGED_AFFINITY_OPTIONS,
)
from .errors import UnknownRegulationVersionError


@dataclass(slots=True, frozen=True)
class RegulationVersion:
    """A named game patch or mod.

    Attributes:
        key: Registry key, e.g. 'latest'.
        name: Display name.
        data_file: Regulation JSON file name (relative to the data dir or base URL).
        affinity_options: Affinity id -> display name for this dataset.
        info: Optional note shown alongside the version.
        disable_two_handing_attack_power_bonus: No attack power bonus from two-handing.
        max_upgrade_level: Override of the highest regular upgrade level.
        split_spell_scaling: Catalysts have separate spell scaling per damage type.
        ineffective_attribute_penalty: Penalty for unmet requirements.
    """

    key: str
    name: str
    data_file: str
    affinity_options: dict[int, str] = field(default_factory=lambda: dict(AFFINITY_OPTIONS))
    info: str | None = None
    disable_two_handing_attack_power_bonus: bool = False
    max_upgrade_level: int | None = None
    split_spell_scaling: bool = False
    ineffective_attribute_penalty: float = DEFAULT_INEFFECTIVE_ATTRIBUTE_PENALTY

    @property
    def max_regular_upgrade_level(self) -> int:
        return self.max_upgrade_level if self.max_upgrade_level is not None else MAX_REGULAR_UPGRADE_LEVEL

    def calculation_options(self) -> dict[str, object]:
        """Keyword arguments for compute_attack."""
        return {
            "disable_two_handing_attack_power_bonus": self.disable_two_handing_attack_power_bonus,
            "ineffective_attribute_penalty": self.ineffective_attribute_penalty,
            "split_spell_scaling": self.split_spell_scaling,
        }


REGULATION_VERSIONS: dict[str, RegulationVersion] = {
    "latest": RegulationVersion(
        key="latest",
        name="Patch 1.16 (latest)",
        data_file="regulation-vanilla-v1.16.json",
    ),
    "reforged": RegulationVersion(
        key="reforged",
        name="ELDEN RING Reforged (mod)",
        data_file="regulation-reforged-v1.2.3.json",
        affinity_options=dict(REFORGED_AFFINITY_OPTIONS),
        info="Using regulation data from the ELDEN RING Reforged mod v1.2.3",
        # No attack power bonus for two-handing in this mod
        disable_two_handing_attack_power_bonus=True,
        ineffective_attribute_penalty=0.5,
    ),
    "convergence": RegulationVersion(
        key="convergence",
        name="The Convergence (mod)",
        data_file="regulation-convergence-v2.1.2.json",
        affinity_options=dict(CONVERGENCE_AFFINITY_OPTIONS),
        info="Using regulation data from The Convergence Mod v2.1.2",
        max_upgrade_level=15,
        split_spell_scaling=True,
    ),
}

DEFAULT_REGULATION_VERSION = "latest"


def get_regulation_version(key: str) -> RegulationVersion:
    try:
        return REGULATION_VERSIONS[key]
    except KeyError:
        raise UnknownRegulationVersionError(key) from None
