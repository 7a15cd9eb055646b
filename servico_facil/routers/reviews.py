from fastapi import APIRouter, Depends, HTTPException
from redis import Redis
from sqlalchemy.orm import Session
from typing import List

from ..db import get_db
from ..deps import get_redis
from ..live import publish_provider_change
from .. import reviews, schemas

router = APIRouter(tags=["reviews"])


@router.post("/providers/{uid}/reviews", response_model=schemas.ReviewOut, status_code=201)
def create_review(
    uid: str,
    payload: schemas.ReviewCreate,
    db: Session = Depends(get_db),
    r: Redis = Depends(get_redis),
):
    review = reviews.add_review(
        db, uid, payload.client_id, payload.client_name, payload.rating, payload.comment
    )
    if review is None:
        raise HTTPException(status_code=404, detail="provider not found")
    publish_provider_change(r, uid, "provider.reviewed")
    return review


@router.get("/providers/{uid}/reviews", response_model=List[schemas.ReviewOut])
def provider_reviews(uid: str, db: Session = Depends(get_db)):
    if reviews.get_provider(db, uid) is None:
        raise HTTPException(status_code=404, detail="provider not found")
    return reviews.list_provider_reviews(db, uid)


@router.get("/clients/{client_id}/reviews", response_model=List[schemas.ReviewOut])
def client_reviews(client_id: str, db: Session = Depends(get_db)):
    return reviews.list_client_reviews(db, client_id)
