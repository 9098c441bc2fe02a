# weapon_calculator/io/parsers.py
from __future__ import annotations

from typing import Any, Dict, Iterable, Mapping

from ..defaults import MAX_ATTRIBUTE_VALUE, MIN_ATTRIBUTE_VALUE
from ..models import ALL_ATTRIBUTES, Attribute

REGULATION_TABLES: tuple[str, ...] = (
    "calcCorrectGraphs",
    "attackElementCorrects",
    "reinforceTypes",
    "statusSpEffectParams",
)


def _require_keys(d: Dict[str, Any], keys: Iterable[str], where: str) -> None:
    missing = [k for k in keys if k not in d]
    if missing:
        raise ValueError(f"Missing keys {missing} in {where}")


def parse_regulation_payload(data: Any) -> Dict[str, Any]:
    """Light validation of a regulation dataset's top-level shape."""
    if not isinstance(data, dict):
        raise TypeError("regulation payload must be an object")
    _require_keys(data, (*REGULATION_TABLES, "weapons"), "regulation payload")
    for table in REGULATION_TABLES:
        if not isinstance(data[table], dict):
            raise TypeError(f"{table} must be an object keyed by id")
    if not isinstance(data["weapons"], list):
        raise TypeError("weapons must be a list")
    for i, weapon in enumerate(data["weapons"]):
        if not isinstance(weapon, dict):
            raise TypeError(f"weapons[{i}] must be an object")
        _require_keys(
            weapon,
            ["name", "weaponType", "attackElementCorrectId", "reinforceTypeId"],
            f"weapons[{i}]",
        )
    return data


def parse_attributes(data: Mapping[str, Any]) -> dict[Attribute, int]:
    """Validate character attributes: all five present, integers in 1..99."""
    out: dict[Attribute, int] = {}
    for attribute in ALL_ATTRIBUTES:
        raw = data.get(attribute.value)
        if raw is None:
            raise ValueError(f"Missing attribute '{attribute.value}'")
        try:
            value = int(raw)
        except (TypeError, ValueError):
            raise ValueError(f"Attribute '{attribute.value}' must be an integer, got {raw!r}") from None
        if not MIN_ATTRIBUTE_VALUE <= value <= MAX_ATTRIBUTE_VALUE:
            raise ValueError(
                f"Attribute '{attribute.value}' must be between "
                f"{MIN_ATTRIBUTE_VALUE} and {MAX_ATTRIBUTE_VALUE}, got {value}"
            )
        out[attribute] = value
    return out
