import logging
from typing import Optional

from fastapi import APIRouter, Depends, Header, HTTPException

from ..config import RADIUS_OPTIONS_KM
from ..deps import get_preference_store
from ..preferences import PreferenceStore, load_search_radius, save_search_radius
from .. import schemas

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/preferences", tags=["preferences"])


def _require_device(x_device_id: Optional[str]) -> str:
    if not x_device_id:
        raise HTTPException(status_code=400, detail="Missing X-Device-Id header")
    return x_device_id


@router.get("/radius")
def get_radius(
    store: PreferenceStore = Depends(get_preference_store),
    x_device_id: Optional[str] = Header(None),
):
    device = _require_device(x_device_id)
    return {"radius_km": load_search_radius(store, device), "options": list(RADIUS_OPTIONS_KM)}


@router.put("/radius")
def put_radius(
    body: schemas.RadiusPreference,
    store: PreferenceStore = Depends(get_preference_store),
    x_device_id: Optional[str] = Header(None),
):
    device = _require_device(x_device_id)
    try:
        save_search_radius(store, device, body.radius_km)
    except Exception as e:
        logger.error("saving search radius for %s failed: %s", device, e)
        raise HTTPException(status_code=500, detail=f"Preference store error: {str(e)}")
    return {"radius_km": body.radius_km, "options": list(RADIUS_OPTIONS_KM)}
