from .calculator import (
    adjust_attributes_for_two_handing,
    compute_attack,
    get_ineffective_attributes,
    scaling_grade,
)
from .codec import decode_weapons, encode_weapons
from .errors import (
    CodecError,
    RegulationDataError,
    UnknownRegulationVersionError,
    WeaponCalculatorError,
)
from .io import Loader, load_regulation_data
from .models import (
    AttackPower,
    AttackPowerType,
    AttackResult,
    Attribute,
    Weapon,
    WeaponRow,
    WeaponType,
)
from .regulation import Regulation, decode_regulation_data
from .scaling_curves import BUILTIN_CURVES, CurveTable, curve, status_curve
from .search import FilterCriteria, SortBy, SortKey, build_weapon_rows, filter_weapons, sort_weapons
from .versions import REGULATION_VERSIONS, RegulationVersion, get_regulation_version

__version__ = "0.1.0"

__all__ = [
    "AttackPower",
    "AttackPowerType",
    "AttackResult",
    "Attribute",
    "BUILTIN_CURVES",
    "CodecError",
    "CurveTable",
    "FilterCriteria",
    "Loader",
    "REGULATION_VERSIONS",
    "Regulation",
    "RegulationDataError",
    "RegulationVersion",
    "SortBy",
    "SortKey",
    "UnknownRegulationVersionError",
    "Weapon",
    "WeaponCalculatorError",
    "WeaponRow",
    "WeaponType",
    "adjust_attributes_for_two_handing",
    "build_weapon_rows",
    "compute_attack",
    "curve",
    "decode_regulation_data",
    "decode_weapons",
    "encode_weapons",
    "filter_weapons",
    "get_ineffective_attributes",
    "get_regulation_version",
    "load_regulation_data",
    "scaling_grade",
    "sort_weapons",
    "status_curve",
]
