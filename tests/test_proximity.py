from servico_facil.discovery import normalize_records
from servico_facil.location import Location
from servico_facil.proximity import ProximityNotifier, matches_interests

HERE = Location(-22.91, -43.18)


def _records(*rows):
    base = {"display_name": "Carlos", "service_type": "Encanador", "neighborhood": "Centro"}
    return normalize_records([{**base, **r} for r in rows])


class Clock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now


def test_matches_interests():
    assert matches_interests("Eletricista", []) is True
    assert matches_interests("Eletricista", ["eletric"]) is True
    assert matches_interests("Eletricista", ["pintor", "ELETRI"]) is True
    assert matches_interests("Eletricista", ["pintor"]) is False


def test_alerts_only_nearby_available_matching_providers():
    providers = _records(
        {"uid": "near", "latitude": -22.91, "longitude": -43.18},
        {"uid": "far", "latitude": -23.0, "longitude": -43.18},
        {"uid": "busy", "latitude": -22.91, "longitude": -43.18, "status": "busy"},
        {"uid": "paint", "latitude": -22.91, "longitude": -43.18, "service_type": "Pintor"},
        {"uid": "me", "latitude": -22.91, "longitude": -43.18},
    )
    alerts = ProximityNotifier().check("me", HERE, providers, ["encan"])
    assert [a.provider_uid for a in alerts] == ["near"]
    assert alerts[0].title == "Encanador próximo!"
    assert alerts[0].message == "Carlos está a 0.0km de você"


def test_cooldown_suppresses_repeat_alerts():
    clock = Clock()
    notifier = ProximityNotifier(cooldown_seconds=1800, clock=clock)
    providers = _records({"uid": "near", "latitude": -22.91, "longitude": -43.18})

    assert len(notifier.check("u1", HERE, providers)) == 1
    clock.now += 60
    assert notifier.check("u1", HERE, providers) == []
    assert len(notifier.check("u2", HERE, providers)) == 1
    clock.now += 1800
    assert len(notifier.check("u1", HERE, providers)) == 1


def test_proximity_endpoint(client, make_provider):
    make_provider(uid="near", service_type="Eletricista", lat=-22.91, lon=-43.18)
    make_provider(uid="nocoords", service_type="Eletricista", lat=None, lon=None)
    body = {"user_id": "u1", "lat": -22.9068, "lon": -43.1729, "interests": ["eletric"]}

    first = client.post("/proximity/check", json=body).json()
    assert [a["provider_uid"] for a in first] == ["near"]
    assert client.post("/proximity/check", json=body).json() == []


def test_expired_cooldown_entries_are_dropped():
    clock = Clock()
    notifier = ProximityNotifier(cooldown_seconds=1800, clock=clock)
    providers = _records(
        {"uid": "p1", "latitude": -22.91, "longitude": -43.18},
        {"uid": "p2", "latitude": -22.91, "longitude": -43.18},
    )
    notifier.check("u1", HERE, providers)
    assert len(notifier._last_sent) == 2

    clock.now += 1800
    notifier.check("u2", HERE, providers[:1])
    assert set(notifier._last_sent) == {"u2_p1"}
