from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..db import get_db
from ..discovery import normalize_records
from ..location import Location
from ..proximity import ProximityNotifier
from ..sources import SqlProviderSource
from .. import schemas

router = APIRouter(prefix="/proximity", tags=["proximity"])

# process-wide so the cooldown holds across requests
notifier = ProximityNotifier()


@router.post("/check", response_model=List[schemas.ProximityAlertOut])
def check_nearby(body: schemas.ProximityCheckRequest, db: Session = Depends(get_db)):
    rows = SqlProviderSource(db).list_available_providers()
    # only providers with real coordinates can be "nearby"
    located = [row for row in rows if row["latitude"] is not None and row["longitude"] is not None]
    alerts = notifier.check(
        body.user_id,
        Location(body.lat, body.lon),
        normalize_records(located),
        body.interests,
    )
    return [
        schemas.ProximityAlertOut(
            provider_uid=a.provider_uid,
            provider_name=a.provider_name,
            service_type=a.service_type,
            distance_km=a.distance_km,
            title=a.title,
            message=a.message,
        )
        for a in alerts
    ]
