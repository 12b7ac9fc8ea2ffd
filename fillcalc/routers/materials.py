from fastapi import APIRouter, HTTPException
from typing import List

from ..densities import DENSITIES, LABELS, normalize_material
from ..schemas import MaterialDensity

router = APIRouter(prefix="/materials", tags=["materials"])


def _entry(name: str) -> MaterialDensity:
    return MaterialDensity(name=name, label=LABELS.get(name, name), density=DENSITIES[name])


@router.get("/", response_model=List[MaterialDensity])
def list_densities():
    return [_entry(name) for name in DENSITIES]


@router.get("/{name}", response_model=MaterialDensity)
def get_density(name: str):
    key = normalize_material(name)
    if key not in DENSITIES:
        raise HTTPException(status_code=404, detail=f"Unknown material: {name}")
    return _entry(key)
