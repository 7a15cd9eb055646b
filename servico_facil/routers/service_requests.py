from typing import List, Literal, Optional

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from ..db import get_db
from .. import schemas, service_requests

router = APIRouter(prefix="/service-requests", tags=["service-requests"])


@router.post("", response_model=schemas.ServiceRequestCreated, status_code=201)
def create_request(body: schemas.ServiceRequestCreate, db: Session = Depends(get_db)):
    try:
        req, nearby = service_requests.create_service_request(
            db,
            body.client_id,
            body.client_name,
            body.service_type,
            body.lat,
            body.lon,
            body.address,
            body.description,
        )
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=500, detail=f"DB error: {str(e)}")
    return schemas.ServiceRequestCreated(
        request=schemas.ServiceRequestOut.model_validate(req),
        notified_providers=[
            schemas.NearbyProviderOut(uid=n.uid, display_name=n.display_name, distance_km=n.distance_km)
            for n in nearby
        ],
    )


@router.get("", response_model=List[schemas.ServiceRequestOut])
def list_requests(
    client_id: Optional[str] = None,
    status: Optional[Literal["active", "fulfilled", "cancelled"]] = None,
    db: Session = Depends(get_db),
):
    return service_requests.list_service_requests(db, client_id=client_id, status=status)


@router.patch("/{request_id}/status", response_model=schemas.ServiceRequestOut)
def update_request_status(
    request_id: int,
    body: schemas.ServiceRequestStatusUpdate,
    db: Session = Depends(get_db),
):
    req = service_requests.update_service_request_status(db, request_id, body.status)
    if req is None:
        raise HTTPException(status_code=404, detail="service request not found")
    return req
