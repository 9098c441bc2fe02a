# apps/api/routers/weapons.py
from __future__ import annotations

from typing import Any, List
import requests
from fastapi import APIRouter, HTTPException, Request
from logging import Logger

from apps.api.schemas import (
    AttackPowerOut,
    RegulationListResponse,
    RegulationVersionOut,
    SearchRequest,
    SearchResponse,
    WeaponRowOut,
)
from weapon_calculator.calculator import scaling_grade
from weapon_calculator.errors import (
    CodecError,
    RegulationDataError,
    UnknownRegulationVersionError,
)
from weapon_calculator.io.loader import Loader, regulation_source
from weapon_calculator.io.parsers import parse_attributes
from weapon_calculator.models import ALL_ATTRIBUTES, WeaponRow
from weapon_calculator.regulation import Regulation
from weapon_calculator.search import FilterCriteria, build_weapon_rows, parse_sort_by
from weapon_calculator.utils import parse_weapon_type
from weapon_calculator.versions import (
    DEFAULT_REGULATION_VERSION,
    REGULATION_VERSIONS,
    RegulationVersion,
    get_regulation_version,
)

router = APIRouter()


# ---------------- Helpers ----------------

def _version_or_404(key: str) -> RegulationVersion:
    try:
        return get_regulation_version(key)
    except UnknownRegulationVersionError as e:
        raise HTTPException(status_code=404, detail=str(e))


def _regulation_for(request: Request, version: RegulationVersion) -> Regulation:
    """Decode a version's dataset once per app and cache it on app.state."""
    state = request.app.state
    cached = state.regulations.get(version.key)
    if cached is not None:
        return cached

    logger: Logger = state.logger
    source = regulation_source(version, data_dir=state.data_dir, base_url=state.base_url)
    try:
        regulation = Loader(logger).load_regulation(source, version)
    except FileNotFoundError:
        raise HTTPException(status_code=404, detail=f"Regulation data for '{version.key}' not found")
    except requests.RequestException as e:
        logger.error("Failed to fetch regulation data for %s: %s", version.key, e)
        raise HTTPException(status_code=502, detail=f"Could not fetch regulation data: {e}")
    except (RegulationDataError, TypeError, ValueError) as e:
        logger.exception("Failed to decode regulation data for %s", version.key)
        raise HTTPException(status_code=500, detail=f"Invalid regulation data: {e}")

    state.regulations[version.key] = regulation
    return regulation


def _row_out(row: WeaponRow) -> WeaponRowOut:
    weapon, result = row.weapon, row.result
    scaling = weapon.attribute_scaling[result.upgrade_level]
    return WeaponRowOut(
        name=weapon.name,
        weapon_name=weapon.weapon_name,
        affinity_id=weapon.affinity_id,
        weapon_type=weapon.weapon_type.label,
        weight=weapon.weight,
        upgrade_level=result.upgrade_level,
        attack={
            t.name.lower(): AttackPowerOut(base=ap.base, scaling=ap.scaling, total=ap.total)
            for t, ap in result.attack_power.items()
        },
        total_attack=result.total_attack,
        spell_scaling={t.name.lower(): v for t, v in result.spell_scaling.items()},
        scaling_grades={a.value: scaling_grade(scaling[a]) for a in ALL_ATTRIBUTES if scaling.get(a)},
        requirements={a.value: v for a, v in weapon.requirements.items()},
        ineffective_attributes=[a.value for a in result.ineffective_attributes],
    )


# ---------------- Routes ----------------

@router.get("/regulations", response_model=RegulationListResponse)
def list_regulations() -> RegulationListResponse:
    return RegulationListResponse(
        default=DEFAULT_REGULATION_VERSION,
        versions=[
            RegulationVersionOut(
                key=v.key,
                name=v.name,
                info=v.info,
                max_upgrade_level=v.max_regular_upgrade_level,
                affinity_options=v.affinity_options,
                disable_two_handing_attack_power_bonus=v.disable_two_handing_attack_power_bonus,
                split_spell_scaling=v.split_spell_scaling,
                ineffective_attribute_penalty=v.ineffective_attribute_penalty,
            )
            for v in REGULATION_VERSIONS.values()
        ],
    )


@router.get("/regulations/{key}/weapons")
def encoded_weapons(key: str, request: Request) -> List[Any]:
    """All weapons of a version in the compact codec wire format."""
    version = _version_or_404(key)
    regulation = _regulation_for(request, version)
    logger: Logger = request.app.state.logger
    try:
        return Loader(logger).dump_weapon_list(list(regulation.weapons))
    except CodecError as e:
        logger.exception("Failed to encode weapons for %s", key)
        raise HTTPException(status_code=500, detail=f"Encoding failed: {e}")


@router.post("/regulations/{key}/search", response_model=SearchResponse)
def search(key: str, req: SearchRequest, request: Request) -> SearchResponse:
    """
    Filter -> compute -> sort -> paginate.
    Returns:
      {
        "ok": true,
        "regulation": str,
        "total": int,          # matches before pagination
        "rows": [ {name, weapon_name, affinity_id, weapon_type, attack: {type: {base, scaling, total}}, ...}, ... ]
      }
    """
    logger: Logger = request.app.state.logger
    version = _version_or_404(key)

    if req.upgrade_level > version.max_regular_upgrade_level:
        raise HTTPException(
            status_code=400,
            detail=f"upgrade_level must be at most {version.max_regular_upgrade_level} for '{key}'",
        )

    try:
        attributes = parse_attributes(req.attributes.as_mapping())
        weapon_types = frozenset(parse_weapon_type(t) for t in req.weapon_types)
        sort_by = parse_sort_by(req.sort_by)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    regulation = _regulation_for(request, version)
    criteria = FilterCriteria(
        weapon_types=weapon_types,
        affinity_ids=frozenset(req.affinity_ids),
        effective_with_attributes=attributes if req.effective_only else None,
        two_handing=req.two_handing,
        include_dlc=req.include_dlc,
        max_weight=req.max_weight,
    )
    logger.info("Search on %s: sort=%s level=%d", key, sort_by, req.upgrade_level)

    result = build_weapon_rows(
        regulation,
        version,
        attributes=attributes,
        upgrade_level=req.upgrade_level,
        criteria=criteria,
        two_handing=req.two_handing,
        sort_by=sort_by,
        reverse=req.reverse,
        offset=req.offset,
        limit=req.limit,
    )

    rows: List[WeaponRowOut] = [_row_out(row) for row in result.rows]
    return SearchResponse(ok=True, regulation=version.key, total=result.total, rows=rows)
