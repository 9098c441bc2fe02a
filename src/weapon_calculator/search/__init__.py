from .filtering import FilterCriteria, filter_weapons
from .rows import RowsResult, build_weapon_rows, paginate
from .sorting import SortBy, SortKey, parse_sort_by, sort_weapons

__all__ = [
    "FilterCriteria",
    "RowsResult",
    "SortBy",
    "SortKey",
    "build_weapon_rows",
    "filter_weapons",
    "paginate",
    "parse_sort_by",
    "sort_weapons",
]
