from fastapi import APIRouter, Depends, HTTPException
from redis import Redis
from sqlalchemy.orm import Session
from typing import List

from ..db import get_db
from ..deps import get_redis
from ..live import publish_provider_change
from ..reviews import get_provider
from ..stats import get_provider_stats
from .. import models, schemas

router = APIRouter(prefix="/providers", tags=["providers"])


@router.get("", response_model=List[schemas.ProviderOut])
def list_providers(db: Session = Depends(get_db)):
    rows = db.query(models.Provider).order_by(models.Provider.id.desc()).limit(50).all()
    return rows


@router.post("", response_model=schemas.ProviderOut, status_code=201)
def create_provider(
    payload: schemas.ProviderCreate,
    db: Session = Depends(get_db),
    r: Redis = Depends(get_redis),
):
    obj = models.Provider(**payload.model_dump())
    db.add(obj)
    try:
        db.commit()
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=500, detail=f"DB error: {str(e)}")
    db.refresh(obj)
    publish_provider_change(r, obj.uid, "provider.created")
    return obj


@router.get("/{uid}", response_model=schemas.ProviderOut)
def read_provider(uid: str, db: Session = Depends(get_db)):
    obj = get_provider(db, uid)
    if not obj:
        raise HTTPException(status_code=404, detail="provider not found")
    return obj


@router.patch("/{uid}/status", response_model=schemas.ProviderOut)
def update_status(
    uid: str,
    payload: schemas.StatusUpdate,
    db: Session = Depends(get_db),
    r: Redis = Depends(get_redis),
):
    obj = get_provider(db, uid)
    if not obj:
        raise HTTPException(status_code=404, detail="provider not found")
    obj.status = payload.status
    db.commit()
    db.refresh(obj)
    publish_provider_change(r, obj.uid, "provider.status")
    return obj


@router.get("/{uid}/stats", response_model=schemas.ProviderStatsOut)
def provider_stats(uid: str, db: Session = Depends(get_db)):
    obj = get_provider(db, uid)
    if not obj:
        raise HTTPException(status_code=404, detail="provider not found")
    s = get_provider_stats(db, obj)
    return schemas.ProviderStatsOut(
        total_reviews=s.total_reviews,
        average_rating=s.average_rating,
        completed_services=s.completed_services,
        response_time=s.response_time,
        join_date=s.join_date,
    )
