import logging
from typing import Optional

from fastapi import APIRouter, Depends, Header, HTTPException
from sqlalchemy.orm import Session

from ..config import DEFAULT_SEARCH_RADIUS_KM
from ..db import get_db
from ..deps import get_preference_store
from ..discovery import SearchCriteria, discover
from ..location import Location
from ..preferences import PreferenceStore, load_search_radius
from ..sources import SqlProviderSource
from .. import schemas

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/search", tags=["search"])


@router.post("/providers", response_model=schemas.SearchResponse)
def search_providers(
    payload: schemas.SearchRequest,
    db: Session = Depends(get_db),
    store: PreferenceStore = Depends(get_preference_store),
    x_device_id: Optional[str] = Header(None),
):
    if (payload.lat is None) != (payload.lon is None):
        raise HTTPException(status_code=400, detail="lat and lon must be sent together")

    location = None
    if payload.lat is not None:
        location = Location(payload.lat, payload.lon)

    radius_km = payload.radius_km
    if radius_km is None:
        radius_km = load_search_radius(store, x_device_id) if x_device_id else DEFAULT_SEARCH_RADIUS_KM

    criteria = SearchCriteria(
        service_type_filter=payload.service_type,
        neighborhood_filter=payload.neighborhood,
        search_text=payload.search_text,
        radius_km=radius_km,
    )
    snapshot = SqlProviderSource(db).list_available_providers()
    ranked = discover(location, snapshot, criteria)

    hits = [
        schemas.ProviderHit(
            uid=p.uid,
            display_name=p.display_name,
            service_type=p.service_type,
            neighborhood=p.neighborhood,
            photo_url=p.photo_url,
            rating=p.rating,
            review_count=p.review_count,
            status=p.status.value,
            lat=p.latitude,
            lon=p.longitude,
            is_premium=p.is_premium,
            distance_km=p.distance_km,
        )
        for p in ranked
    ]
    logger.info("search: %d/%d hits within %skm (location_known=%s)",
                len(hits), len(snapshot), radius_km, location is not None)
    return schemas.SearchResponse(
        count=len(hits),
        radius_km=radius_km,
        location_known=location is not None,
        hits=hits,
    )
