import logging
from dataclasses import dataclass
from typing import Optional

from sqlalchemy.orm import Session

from . import models
from .config import SERVICE_REQUEST_LIST_LIMIT, SERVICE_REQUEST_RADIUS_KM
from .discovery import haversine_km

logger = logging.getLogger(__name__)

REQUEST_STATUSES = ("active", "fulfilled", "cancelled")


@dataclass(frozen=True)
class NearbyProvider:
    uid: str
    display_name: Optional[str]
    distance_km: float


def find_nearby_providers(db: Session, request: models.ServiceRequest) -> list[NearbyProvider]:
    """Providers offering exactly the requested service within the request radius.

    Providers with no stored coordinates are never matched.
    """
    rows = (
        db.query(models.Provider)
        .filter(
            models.Provider.role == "provider",
            models.Provider.service_type == request.service_type,
            models.Provider.lat.is_not(None),
            models.Provider.lon.is_not(None),
        )
        .all()
    )
    nearby = []
    for p in rows:
        d = haversine_km(request.lat, request.lon, p.lat, p.lon)
        if d <= request.radius_km:
            nearby.append(NearbyProvider(uid=p.uid, display_name=p.display_name, distance_km=d))
    nearby.sort(key=lambda n: n.distance_km)
    return nearby


def notify_nearby_providers(db: Session, request: models.ServiceRequest) -> list[NearbyProvider]:
    nearby = find_nearby_providers(db, request)
    logger.info("request #%s: %d %s provider(s) within %skm",
                request.id, len(nearby), request.service_type, request.radius_km)
    for n in nearby:
        logger.info("[REQUEST] #%s -> %s (%.1f km)", request.id, n.uid, n.distance_km)
    return nearby


def create_service_request(
    db: Session,
    client_id: str,
    client_name: str,
    service_type: str,
    lat: float,
    lon: float,
    address: str,
    description: str = "",
) -> tuple[models.ServiceRequest, list[NearbyProvider]]:
    req = models.ServiceRequest(
        client_id=client_id,
        client_name=client_name,
        service_type=service_type,
        lat=lat,
        lon=lon,
        address=address,
        radius_km=SERVICE_REQUEST_RADIUS_KM,
        description=description or "",
        status="active",
    )
    db.add(req)
    db.commit()
    db.refresh(req)
    return req, notify_nearby_providers(db, req)


def list_service_requests(
    db: Session,
    client_id: Optional[str] = None,
    status: Optional[str] = None,
    limit: int = SERVICE_REQUEST_LIST_LIMIT,
) -> list[models.ServiceRequest]:
    q = db.query(models.ServiceRequest)
    if client_id:
        q = q.filter(models.ServiceRequest.client_id == client_id)
    if status:
        q = q.filter(models.ServiceRequest.status == status)
    return (
        q.order_by(models.ServiceRequest.created_at.desc(), models.ServiceRequest.id.desc())
        .limit(limit)
        .all()
    )


def update_service_request_status(
    db: Session, request_id: int, status: str
) -> Optional[models.ServiceRequest]:
    if status not in REQUEST_STATUSES:
        raise ValueError(f"status must be one of {REQUEST_STATUSES}, got {status!r}")
    req = db.get(models.ServiceRequest, request_id)
    if req is None:
        return None
    req.status = status
    db.commit()
    db.refresh(req)
    return req
