"""Attribute scaling curves.

A scaling curve maps a character attribute value to a coefficient that is
multiplied by a weapon's base attack and attribute scaling. Every curve is a
piecewise function over a few breakpoints ("soft caps"). Between two
breakpoints the coefficient moves from the previous stage's grow value to the
next one, either linearly or along a power-law blend controlled by the
previous stage's exponent:

    ratio  = (value - prev.max_val) / (stage.max_val - prev.max_val), clamped to [0, 1]
    adj_pt > 0:  ratio ** adj_pt
    adj_pt < 0:  1 - (1 - ratio) ** -adj_pt

Curves are evaluated once into a lookup tuple indexed by attribute value.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Mapping, Sequence

from .defaults import DEFAULT_STATUS_CURVE_ID, MAX_CURVE_ATTRIBUTE_VALUE


@dataclass(slots=True, frozen=True)
class CurveStage:
    """One breakpoint of a scaling curve.

    Attributes:
        max_val: Highest attribute value where this stage applies (the soft cap).
        max_grow_val: Coefficient reached at max_val.
        adj_pt: Exponent applied to the segment that starts at this stage.
    """

    max_val: int
    max_grow_val: float
    adj_pt: float = 1.0


def _stages(*rows: tuple[int, float, float]) -> tuple[CurveStage, ...]:
    return tuple(CurveStage(*row) for row in rows)


# Curves known to match in-game attack values. Regulation data may override them.
BUILTIN_CURVE_STAGES: dict[int, tuple[CurveStage, ...]] = {
    0: _stages((1, 0.0, 1.2), (18, 0.25, -1.2), (60, 0.75, 1), (80, 0.9, 1), (150, 1.1, 1)),
    1: _stages((1, 0.0, 1.2), (20, 0.35, -1.2), (60, 0.75, 1), (80, 0.9, 1), (150, 1.1, 1)),
    2: _stages((1, 0.0, 1.2), (20, 0.35, -1.2), (60, 0.75, 1), (80, 0.9, 1), (150, 1.1, 1)),
    4: _stages((1, 0.0, 1), (20, 0.4, 1), (50, 0.8, 1), (80, 0.95, 1), (99, 1.0, 1)),
    # Arcane scaling of status buildup
    DEFAULT_STATUS_CURVE_ID: _stages((1, 0.0, 1), (25, 0.1, 1), (45, 0.75, 1), (60, 0.9, 1), (99, 1.0, 1)),
    7: _stages((1, 0.0, 1.2), (20, 0.35, -1.2), (60, 0.75, 1), (80, 0.9, 1), (150, 1.1, 1)),
    8: _stages((1, 0.0, 1.2), (16, 0.25, -1.2), (60, 0.75, 1), (80, 0.9, 1), (150, 1.1, 1)),
    12: _stages((1, 0.0, 1), (15, 0.1, 1), (30, 0.55, 1), (45, 0.75, 1), (99, 1.0, 1)),
    14: _stages((1, 0.0, 1), (20, 0.4, 1), (40, 0.6, 1), (80, 0.85, 1), (99, 1.0, 1)),
    15: _stages((1, 0.0, 1), (25, 0.25, 1), (60, 0.65, 1), (80, 0.95, 1), (99, 1.45, 1)),
    16: _stages((1, 0.0, 1), (18, 0.2, 1), (60, 0.75, 1), (80, 0.9, 1), (99, 1.0, 1)),
}


def stage_coefficient(stages: Sequence[CurveStage], attribute_value: float) -> float:
    """Evaluate a staged curve at a single attribute value."""
    if not stages:
        return 0.0
    if len(stages) == 1:
        return stages[0].max_grow_val

    last = len(stages) - 1
    for i in range(1, len(stages)):
        prev, stage = stages[i - 1], stages[i]
        if attribute_value > stage.max_val and i != last:
            continue

        span = stage.max_val - prev.max_val
        ratio = 1.0 if span <= 0 else (attribute_value - prev.max_val) / span
        ratio = max(0.0, min(1.0, ratio))

        if prev.adj_pt > 0:
            ratio = ratio**prev.adj_pt
        elif prev.adj_pt < 0:
            ratio = 1 - (1 - ratio) ** -prev.adj_pt

        return prev.max_grow_val + (stage.max_grow_val - prev.max_grow_val) * ratio

    return stages[-1].max_grow_val  # pragma: no cover


def evaluate_curve(stages: Sequence[CurveStage]) -> tuple[float, ...]:
    """Precompute a staged curve for every attribute value from 0 to the evaluation cap."""
    return tuple(stage_coefficient(stages, v) for v in range(MAX_CURVE_ATTRIBUTE_VALUE + 1))


def parse_curve_stages(raw: Iterable[Mapping[str, float]]) -> tuple[CurveStage, ...]:
    """Convert regulation JSON stages ({maxVal, maxGrowVal, adjPt}) to CurveStages."""
    return tuple(
        CurveStage(
            max_val=int(s["maxVal"]),
            max_grow_val=float(s["maxGrowVal"]),
            adj_pt=float(s.get("adjPt", 1.0)),
        )
        for s in raw
    )


class CurveTable:
    """Immutable set of evaluated scaling curves, keyed by curve variant id.

    A table is built once per regulation version and passed explicitly to the
    decoder and calculator, so several versions can be held side by side.
    """

    __slots__ = ("_values",)

    def __init__(self, stages_by_id: Mapping[int, Sequence[CurveStage]]):
        self._values: dict[int, tuple[float, ...]] = {
            int(curve_id): evaluate_curve(stages) for curve_id, stages in stages_by_id.items()
        }

    def __contains__(self, curve_id: object) -> bool:
        return curve_id in self._values

    def __len__(self) -> int:
        return len(self._values)

    @property
    def ids(self) -> tuple[int, ...]:
        return tuple(sorted(self._values))

    def coefficient(self, curve_id: int, attribute_value: float) -> float:
        """Scaling coefficient for an attribute value. Unknown curves contribute nothing."""
        values = self._values.get(curve_id)
        if values is None:
            return 0.0
        idx = max(0, min(MAX_CURVE_ATTRIBUTE_VALUE, int(attribute_value)))
        return values[idx]

    def merged_with(self, stages_by_id: Mapping[int, Sequence[CurveStage]]) -> "CurveTable":
        """Return a new table with the given curves added (or replacing same-id curves)."""
        table = CurveTable({})
        table._values = dict(self._values)
        table._values.update(
            (int(curve_id), evaluate_curve(stages)) for curve_id, stages in stages_by_id.items()
        )
        return table


BUILTIN_CURVES = CurveTable(BUILTIN_CURVE_STAGES)


def curve(variant_id: int, attribute_value: float) -> float:
    """Scaling coefficient of a built-in curve variant."""
    return BUILTIN_CURVES.coefficient(variant_id, attribute_value)


def status_curve(attribute_value: float) -> float:
    """Arcane scaling coefficient for status effect buildup."""
    return BUILTIN_CURVES.coefficient(DEFAULT_STATUS_CURVE_ID, attribute_value)
