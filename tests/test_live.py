import json
import threading
from unittest.mock import MagicMock

from servico_facil.discovery import SearchCriteria
from servico_facil.live import LiveDiscovery, handle_message, publish_provider_change, subscriber_loop
from servico_facil.location import DEFAULT_LOCATION, StaticLocationProvider


class ListSource:
    def __init__(self, rows):
        self.rows = rows

    def list_available_providers(self, role="provider", must_be_profile_complete=True):
        return list(self.rows)


def _row(uid, **kw):
    row = {"uid": uid, "display_name": uid, "service_type": "Pintor", "neighborhood": "Lapa"}
    row.update(kw)
    return row


def test_handle_message_dispatches_json_payloads():
    seen = []
    msg = {"type": "message", "data": json.dumps({"type": "provider.created", "uid": "a"})}
    assert handle_message(msg, seen.append) is True
    assert seen == [{"type": "provider.created", "uid": "a"}]


def test_handle_message_ignores_noise():
    seen = []
    assert handle_message(None, seen.append) is False
    assert handle_message({"type": "subscribe", "data": 1}, seen.append) is False
    assert handle_message({"type": "message", "data": "not json"}, seen.append) is False
    assert seen == []


def test_publish_swallows_redis_errors():
    r = MagicMock()
    r.publish.side_effect = ConnectionError("down")
    publish_provider_change(r, "a", "provider.created")
    r.publish.assert_called_once()


def test_refresh_recomputes_from_latest_snapshot():
    rows = [_row("a", latitude=-22.91, longitude=-43.18)]
    results = []
    live = LiveDiscovery(
        source_factory=lambda: ListSource(rows),
        location_provider=StaticLocationProvider(-22.91, -43.18),
        criteria=SearchCriteria(radius_km=5),
        on_result=results.append,
    )
    live.refresh()
    rows.append(_row("b", latitude=-22.91, longitude=-43.18, is_premium=True))
    live.refresh({"type": "provider.created", "uid": "b"})

    assert [[p.uid for p in r] for r in results] == [["a"], ["b", "a"]]


def test_refresh_falls_back_when_location_fails():
    class Denied:
        def get_current_location(self):
            raise PermissionError("denied")

    results = []
    live = LiveDiscovery(
        source_factory=lambda: ListSource([_row("a", latitude=DEFAULT_LOCATION.latitude,
                                                longitude=DEFAULT_LOCATION.longitude)]),
        location_provider=Denied(),
        criteria=SearchCriteria(),
        on_result=results.append,
    )
    [p] = live.refresh()
    assert p.distance_km == 0.0


def test_refresh_without_location_provider_has_no_distances():
    live = LiveDiscovery(lambda: ListSource([_row("a")]), None, SearchCriteria(radius_km=1), lambda r: None)
    [p] = live.refresh()
    assert p.distance_km is None


def test_subscriber_loop_feeds_messages_until_stopped():
    stop = threading.Event()
    seen = []
    messages = [
        {"type": "subscribe", "data": 1},
        {"type": "message", "data": json.dumps({"uid": "a"})},
        {"type": "message", "data": json.dumps({"uid": "b"})},
    ]

    def get_message(timeout=None):
        if messages:
            return messages.pop(0)
        stop.set()
        return None

    pubsub = MagicMock()
    pubsub.get_message.side_effect = get_message
    client = MagicMock()
    client.pubsub.return_value = pubsub

    subscriber_loop(lambda: client, seen.append, stop, channel="providers.changed")

    pubsub.subscribe.assert_called_once_with("providers.changed")
    pubsub.close.assert_called_once()
    assert seen == [{"uid": "a"}, {"uid": "b"}]


def test_subscriber_loop_survives_callback_errors():
    stop = threading.Event()
    messages = [{"type": "message", "data": json.dumps({"uid": "a"})}]

    def get_message(timeout=None):
        if messages:
            return messages.pop(0)
        stop.set()
        return None

    pubsub = MagicMock()
    pubsub.get_message.side_effect = get_message
    client = MagicMock()
    client.pubsub.return_value = pubsub

    def boom(payload):
        raise RuntimeError("db down")

    subscriber_loop(lambda: client, boom, stop)
    assert stop.is_set()


def test_subscriber_loop_retries_after_connection_error():
    stop = threading.Event()
    attempts = []

    def factory():
        attempts.append(1)
        if len(attempts) == 1:
            raise ConnectionError("redis down")
        stop.set()
        return MagicMock()

    # stop.wait(backoff) would block for a second; short-circuit it
    stop.wait = lambda timeout=None: False
    subscriber_loop(factory, lambda p: None, stop)
    assert len(attempts) == 2


def test_watch_without_coordinates_keeps_location_unknown():
    from servico_facil.watch import build_location_provider

    assert build_location_provider(None, None) is None
    assert isinstance(build_location_provider(-22.91, -43.18), StaticLocationProvider)
