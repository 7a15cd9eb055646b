from dataclasses import asdict

from fastapi import APIRouter, Depends, HTTPException
from redis import Redis
from sqlalchemy.orm import Session

from ..db import get_db
from ..deps import get_redis
from ..live import publish_provider_change
from ..premium import (
    PREMIUM_PLANS,
    PaymentFailed,
    cancel_subscription,
    check_premium_status,
    subscribe,
)
from ..reviews import get_provider
from .. import schemas

router = APIRouter(tags=["premium"])


def _provider_or_404(db: Session, uid: str):
    obj = get_provider(db, uid)
    if not obj:
        raise HTTPException(status_code=404, detail="provider not found")
    return obj


@router.get("/premium/plans")
def list_plans():
    return [asdict(p) for p in PREMIUM_PLANS.values()]


@router.post("/providers/{uid}/premium", response_model=schemas.SubscriptionOut, status_code=201)
def subscribe_premium(
    uid: str,
    body: schemas.SubscribeRequest,
    db: Session = Depends(get_db),
    r: Redis = Depends(get_redis),
):
    provider = _provider_or_404(db, uid)
    try:
        sub = subscribe(db, provider, body.plan_id, body.payment_method)
    except LookupError:
        raise HTTPException(status_code=404, detail="plan not found")
    except PaymentFailed as e:
        raise HTTPException(status_code=402, detail=str(e))
    publish_provider_change(r, uid, "provider.premium")
    return sub


@router.get("/providers/{uid}/premium", response_model=schemas.PremiumStatusOut)
def premium_status(uid: str, db: Session = Depends(get_db)):
    provider = _provider_or_404(db, uid)
    check_premium_status(db, provider)
    return schemas.PremiumStatusOut(
        provider_uid=provider.uid,
        is_premium=provider.is_premium,
        premium_expires_at=provider.premium_expires_at,
    )


@router.delete("/providers/{uid}/premium")
def cancel_premium(
    uid: str,
    db: Session = Depends(get_db),
    r: Redis = Depends(get_redis),
):
    provider = _provider_or_404(db, uid)
    cancelled = cancel_subscription(db, provider)
    publish_provider_change(r, uid, "provider.premium")
    return {"cancelled": cancelled, "is_premium": False}
