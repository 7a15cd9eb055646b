import logging
import secrets
import time
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Optional

from sqlalchemy.orm import Session

from . import models

logger = logging.getLogger(__name__)

PAYMENT_METHODS = ("stripe", "iap")


@dataclass(frozen=True)
class PremiumPlan:
    id: str
    name: str
    price: float
    currency: str
    duration_days: int
    features: list[str] = field(default_factory=list)


PREMIUM_PLANS = {
    "premium_monthly": PremiumPlan(
        id="premium_monthly",
        name="Plano Premium",
        price=9.99,
        currency="BRL",
        duration_days=30,
        features=[
            "Selo Premium no perfil",
            "Prioridade na listagem",
            "Destaque no mapa",
            "Suporte prioritário",
        ],
    ),
}


@dataclass(frozen=True)
class PaymentResult:
    success: bool
    transaction_id: Optional[str] = None


class PaymentFailed(Exception):
    pass


def _as_utc(dt: datetime) -> datetime:
    # SQLite hands back naive datetimes
    return dt if dt.tzinfo else dt.replace(tzinfo=timezone.utc)


def process_payment(method: str, amount: float, currency: str, provider_uid: str) -> PaymentResult:
    # In real life, call Stripe / the store's IAP API. Here we always succeed.
    if method not in PAYMENT_METHODS:
        return PaymentResult(success=False)
    logger.info("mock %s payment: %.2f %s for %s", method, amount, currency, provider_uid)
    return PaymentResult(
        success=True,
        transaction_id=f"{method}_{int(time.time() * 1000)}_{secrets.token_hex(5)[:9]}",
    )


def subscribe(
    db: Session,
    provider: models.Provider,
    plan_id: str,
    payment_method: str,
    now: Optional[datetime] = None,
) -> models.Subscription:
    plan = PREMIUM_PLANS.get(plan_id)
    if plan is None:
        raise LookupError(f"plan not found: {plan_id}")

    payment = process_payment(payment_method, plan.price, plan.currency, provider.uid)
    if not payment.success:
        raise PaymentFailed(f"payment via {payment_method} failed")

    start = now or datetime.now(timezone.utc)
    end = start + timedelta(days=plan.duration_days)
    sub = models.Subscription(
        provider_uid=provider.uid,
        plan_id=plan.id,
        status="active",
        start_date=start,
        end_date=end,
        payment_method=payment_method,
        transaction_id=payment.transaction_id,
    )
    db.add(sub)
    provider.is_premium = True
    provider.premium_expires_at = end
    db.commit()
    db.refresh(sub)
    logger.info("provider %s subscribed to %s until %s", provider.uid, plan.id, end.isoformat())
    return sub


def _active_subscriptions(db: Session, provider_uid: str) -> list[models.Subscription]:
    return (
        db.query(models.Subscription)
        .filter(
            models.Subscription.provider_uid == provider_uid,
            models.Subscription.status == "active",
        )
        .all()
    )


def check_premium_status(db: Session, provider: models.Provider, now: Optional[datetime] = None) -> bool:
    """Expire lapsed subscriptions and sync the provider's premium flag."""
    now = now or datetime.now(timezone.utc)
    valid = False
    for sub in _active_subscriptions(db, provider.uid):
        if _as_utc(sub.end_date) > now:
            valid = True
        else:
            sub.status = "expired"

    if not valid:
        provider.is_premium = False
        provider.premium_expires_at = None
    db.commit()
    return valid


def cancel_subscription(db: Session, provider: models.Provider) -> int:
    subs = _active_subscriptions(db, provider.uid)
    for sub in subs:
        sub.status = "cancelled"
    provider.is_premium = False
    provider.premium_expires_at = None
    db.commit()
    logger.info("provider %s cancelled %d subscription(s)", provider.uid, len(subs))
    return len(subs)
