# apps/api/schemas.py
from __future__ import annotations
from typing import Dict, List, Optional, Union
from pydantic import BaseModel, Field


class AttributesIn(BaseModel):
    str_: int = Field(..., alias="str", ge=1, le=99)
    dex: int = Field(..., ge=1, le=99)
    int_: int = Field(..., alias="int", ge=1, le=99)
    fai: int = Field(..., ge=1, le=99)
    arc: int = Field(..., ge=1, le=99)

    model_config = {"populate_by_name": True}

    def as_mapping(self) -> Dict[str, int]:
        return self.model_dump(by_alias=True)


class SearchRequest(BaseModel):
    attributes: AttributesIn
    upgrade_level: int = Field(25, ge=0)
    two_handing: bool = False
    weapon_types: List[Union[int, str]] = Field(default_factory=list)
    affinity_ids: List[int] = Field(default_factory=list)
    effective_only: bool = False
    include_dlc: bool = True
    max_weight: Optional[float] = None
    sort_by: str = "total"
    reverse: bool = False
    offset: int = Field(0, ge=0)
    limit: Optional[int] = Field(None, ge=0)


class AttackPowerOut(BaseModel):
    base: float
    scaling: float
    total: float


class WeaponRowOut(BaseModel):
    name: str
    weapon_name: str
    affinity_id: int
    weapon_type: str
    weight: float
    upgrade_level: int
    attack: Dict[str, AttackPowerOut]
    total_attack: float
    spell_scaling: Dict[str, float] = Field(default_factory=dict)
    scaling_grades: Dict[str, str] = Field(default_factory=dict)
    requirements: Dict[str, int] = Field(default_factory=dict)
    ineffective_attributes: List[str] = Field(default_factory=list)


class SearchResponse(BaseModel):
    ok: bool
    regulation: str
    total: int
    rows: List[WeaponRowOut]


class RegulationVersionOut(BaseModel):
    key: str
    name: str
    info: Optional[str] = None
    max_upgrade_level: int
    affinity_options: Dict[int, str]
    disable_two_handing_attack_power_bonus: bool
    split_spell_scaling: bool
    ineffective_attribute_penalty: float


class RegulationListResponse(BaseModel):
    default: str
    versions: List[RegulationVersionOut]
