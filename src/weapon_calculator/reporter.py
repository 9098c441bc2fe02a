"""Terminal report helper for weapon search results.

Usage from CLI:
    from .reporter import WeaponTableReporter, ReportOptions

    reporter = WeaponTableReporter()
    reporter.emit(
        rows=result.rows,                   # List[WeaponRow]
        total=result.total,
        attributes=attributes,
        options=ReportOptions(show_scaling=True, show_requirements=True),
    )
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

import click

from .calculator import scaling_grade
from .defaults import AFFINITY_OPTIONS
from .models import (
    ALL_ATTRIBUTES,
    ALL_DAMAGE_TYPES,
    ALL_STATUS_TYPES,
    AttackPowerType,
    Attribute,
    WeaponRow,
)
from .utils import format_attributes


# ------------------------------- options -------------------------------

@dataclass
class ReportOptions:
    show_status: bool = True
    show_scaling: bool = True
    show_requirements: bool = True
    show_spell_scaling: bool = True
    affinity_options: Optional[Dict[int, str]] = None
    # Limit the amount of output for large datasets
    max_rows_to_show: int = 999999


_SHORT_TYPE_NAMES: Dict[AttackPowerType, str] = {
    AttackPowerType.PHYSICAL: "Phy",
    AttackPowerType.MAGIC: "Mag",
    AttackPowerType.FIRE: "Fir",
    AttackPowerType.LIGHTNING: "Lit",
    AttackPowerType.HOLY: "Hol",
    AttackPowerType.POISON: "Psn",
    AttackPowerType.SCARLET_ROT: "Rot",
    AttackPowerType.BLEED: "Bld",
    AttackPowerType.FROST: "Fst",
    AttackPowerType.SLEEP: "Slp",
    AttackPowerType.MADNESS: "Mad",
    AttackPowerType.DEATH_BLIGHT: "Dth",
}


# ----------------------------- reporter -----------------------------

class WeaponTableReporter:
    """Prints computed weapon rows as a compact, colorized listing."""

    def __init__(self, *, use_colors: bool = True):
        self.use_colors = use_colors

    # ---- public ----
    def emit(
        self,
        *,
        rows: Sequence[WeaponRow],
        total: int,
        attributes: Dict[Attribute, int],
        options: Optional[ReportOptions] = None,
    ) -> None:
        opts = options or ReportOptions()
        affinities = opts.affinity_options or AFFINITY_OPTIONS

        self._print_header(f"⚔️  {total} weapons", color="green", bold=True)
        self._print_kv("Attributes", format_attributes(attributes))
        self._println("")

        if not rows:
            self._print_line("⚠️ No weapons match the current filters.", color="yellow")
            return

        for i, row in enumerate(rows):
            if i >= opts.max_rows_to_show:
                self._println(f"... ({len(rows) - i} more weapons not shown)")
                break
            self._emit_row(row, affinities, opts)

    # ---- sections ----
    def _emit_row(self, row: WeaponRow, affinities: Dict[int, str], opts: ReportOptions) -> None:
        weapon, result = row.weapon, row.result
        affinity = affinities.get(weapon.affinity_id, str(weapon.affinity_id))
        ineffective = bool(result.ineffective_attributes)

        self._print_line(
            f"{weapon.name} +{result.upgrade_level}  [{weapon.weapon_type.label}, {affinity}]",
            color="red" if ineffective else "blue",
        )
        self._print_kv(
            "  Attack",
            self._format_attack(result.attack_power, ALL_DAMAGE_TYPES, total=True, row=row),
            strong=not ineffective,
        )

        if opts.show_status:
            status = self._format_attack(result.attack_power, ALL_STATUS_TYPES, total=False, row=row)
            if status:
                self._print_kv("  Status", status)

        if opts.show_spell_scaling and result.spell_scaling:
            self._print_kv(
                "  Spell scaling",
                "  ".join(f"{_SHORT_TYPE_NAMES[t]} {v:.0f}" for t, v in result.spell_scaling.items()),
            )

        if opts.show_scaling:
            scaling = weapon.attribute_scaling[result.upgrade_level]
            self._print_kv(
                "  Scaling",
                "  ".join(
                    f"{a.value.capitalize()} {scaling_grade(scaling[a])}"
                    for a in ALL_ATTRIBUTES
                    if scaling.get(a)
                )
                or "-",
            )

        if opts.show_requirements and weapon.requirements:
            self._print_kv(
                "  Requires",
                "  ".join(
                    f"{a.value.capitalize()} {weapon.requirements[a]}"
                    + ("*" if a in result.ineffective_attributes else "")
                    for a in ALL_ATTRIBUTES
                    if a in weapon.requirements
                ),
            )
        self._println("")

    # ---- helpers ----
    @staticmethod
    def _format_attack(attack_power, types, *, total: bool, row: WeaponRow) -> str:
        parts: List[str] = [
            f"{_SHORT_TYPE_NAMES[t]} {attack_power[t].total:.0f}"
            for t in types
            if t in attack_power
        ]
        if total and parts:
            parts.append(f"= {row.result.total_attack:.0f}")
        return "  ".join(parts)

    # ---- printing primitives ----
    def _print_header(self, text: str, *, color: Optional[str] = None, bold: bool = False) -> None:
        if self.use_colors and color:
            click.secho(text, fg=color, bold=bold)
        else:
            self._println(text)

    def _print_kv(self, k: str, v: str, *, strong: bool = False) -> None:
        line = f"{k}: {v}"
        if self.use_colors and strong:
            click.secho(line, fg="green", bold=True)
        else:
            self._println(line)

    def _print_line(self, text: str, *, color: Optional[str] = None) -> None:
        if self.use_colors and color:
            click.secho(text, fg=color)
        else:
            self._println(text)

    def _println(self, text: str = "") -> None:
        click.echo(text)
