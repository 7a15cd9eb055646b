from datetime import datetime, timedelta, timezone
from unittest.mock import patch

import pytest

from servico_facil.models import Subscription
from servico_facil.premium import (
    PaymentFailed,
    cancel_subscription,
    check_premium_status,
    process_payment,
    subscribe,
)


def test_mock_payment_transaction_ids():
    stripe = process_payment("stripe", 9.99, "BRL", "u1")
    iap = process_payment("iap", 9.99, "BRL", "u1")
    assert stripe.success and stripe.transaction_id.startswith("stripe_")
    assert iap.success and iap.transaction_id.startswith("iap_")
    assert process_payment("boleto", 9.99, "BRL", "u1").success is False


def test_subscribe_sets_premium_for_plan_duration(db, make_provider):
    provider = make_provider()
    start = datetime(2026, 1, 1, tzinfo=timezone.utc)
    sub = subscribe(db, provider, "premium_monthly", "stripe", now=start)
    assert sub.status == "active"
    assert sub.end_date.replace(tzinfo=timezone.utc) == start + timedelta(days=30)
    assert provider.is_premium is True


def test_subscribe_unknown_plan(db, make_provider):
    with pytest.raises(LookupError):
        subscribe(db, make_provider(), "gold_yearly", "stripe")


def test_subscribe_failed_payment(db, make_provider):
    provider = make_provider()
    with pytest.raises(PaymentFailed):
        subscribe(db, provider, "premium_monthly", "boleto")
    assert provider.is_premium is False


def test_expired_subscription_clears_premium(db, make_provider):
    provider = make_provider()
    start = datetime(2026, 1, 1, tzinfo=timezone.utc)
    subscribe(db, provider, "premium_monthly", "iap", now=start)

    assert check_premium_status(db, provider, now=start + timedelta(days=10)) is True
    assert provider.is_premium is True

    assert check_premium_status(db, provider, now=start + timedelta(days=31)) is False
    assert provider.is_premium is False
    assert db.query(Subscription).one().status == "expired"


def test_cancel_subscription(db, make_provider):
    provider = make_provider()
    subscribe(db, provider, "premium_monthly", "stripe")
    assert cancel_subscription(db, provider) == 1
    assert provider.is_premium is False
    assert db.query(Subscription).one().status == "cancelled"


def test_premium_api_flow(client, make_provider):
    uid = make_provider(uid="prov-1").uid

    plans = client.get("/premium/plans").json()
    assert plans[0]["id"] == "premium_monthly"
    assert plans[0]["price"] == 9.99

    resp = client.post(f"/providers/{uid}/premium", json={"payment_method": "iap"})
    assert resp.status_code == 201
    assert resp.json()["transaction_id"].startswith("iap_")

    status = client.get(f"/providers/{uid}/premium").json()
    assert status["is_premium"] is True

    assert client.delete(f"/providers/{uid}/premium").json() == {"cancelled": 1, "is_premium": False}
    assert client.get(f"/providers/{uid}/premium").json()["is_premium"] is False


def test_premium_api_errors(client, make_provider):
    uid = make_provider(uid="prov-2").uid
    assert client.post(f"/providers/{uid}/premium", json={"plan_id": "nope"}).status_code == 404
    assert client.post("/providers/missing/premium", json={}).status_code == 404

    with patch("servico_facil.premium.process_payment") as pay:
        pay.return_value.success = False
        assert client.post(f"/providers/{uid}/premium", json={}).status_code == 402


def test_premium_provider_ranks_first_in_search(client, make_provider):
    make_provider(uid="regular", lat=-22.91, lon=-43.18)
    make_provider(uid="upgraded", lat=-22.95, lon=-43.20)
    client.post("/providers/upgraded/premium", json={})
    body = client.post("/search/providers", json={"lat": -22.91, "lon": -43.18, "radius_km": 10}).json()
    assert [h["uid"] for h in body["hits"]] == ["upgraded", "regular"]
