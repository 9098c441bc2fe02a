# apps/api/routers/health.py
from __future__ import annotations
from fastapi import APIRouter, Request

from weapon_calculator import __version__

router = APIRouter()

@router.get("/health")
def health(request: Request):
    return {
        "status": "ok",
        "version": __version__,
        "loaded_regulations": sorted(request.app.state.regulations),
    }
