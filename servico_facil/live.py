"""
Live discovery refresh over Redis pub/sub.

Provider writes publish a small event on PROVIDER_CHANNEL. A subscriber
thread listens and, for each event, re-runs discovery over a fresh provider
snapshot and hands the result to a callback. There is no diffing: every
event triggers a full recomputation, and a consumer that gets two results
keeps the newest one.
"""
import json
import logging
import threading
from typing import Any, Callable, Optional

from redis import Redis

from .config import PROVIDER_CHANNEL
from .discovery import RankedProvider, SearchCriteria, discover
from .location import LocationProvider, resolve_location
from .sources import ProviderSource

logger = logging.getLogger(__name__)

MAX_BACKOFF_SECONDS = 30


def publish_provider_change(r: Redis, uid: str, kind: str) -> None:
    try:
        r.publish(PROVIDER_CHANNEL, json.dumps({"type": kind, "uid": uid}))
    except Exception as e:
        # subscribers simply miss this refresh
        logger.warning("could not publish %s for %s: %s", kind, uid, e)


class LiveDiscovery:
    """Recomputes a ranked provider list whenever a snapshot arrives."""

    def __init__(
        self,
        source_factory: Callable[[], ProviderSource],
        location_provider: Optional[LocationProvider],
        criteria: SearchCriteria,
        on_result: Callable[[list[RankedProvider]], None],
    ):
        self.source_factory = source_factory
        self.location_provider = location_provider
        self.criteria = criteria
        self.on_result = on_result

    def refresh(self, event: Optional[dict[str, Any]] = None) -> list[RankedProvider]:
        location = resolve_location(self.location_provider) if self.location_provider else None
        snapshot = self.source_factory().list_available_providers()
        ranked = discover(location, snapshot, self.criteria)
        self.on_result(ranked)
        return ranked


def handle_message(msg: Optional[dict], on_change: Callable[[dict], Any]) -> bool:
    """Dispatch one pub/sub message. Returns True if on_change ran."""
    if not msg or msg.get("type") != "message":
        return False
    data = msg.get("data")
    try:
        payload = json.loads(data)
    except (TypeError, ValueError) as e:
        logger.warning("bad provider event payload: %s :: %r", e, data)
        return False
    on_change(payload)
    return True


def subscriber_loop(
    client_factory: Callable[[], Redis],
    on_change: Callable[[dict], Any],
    stop: threading.Event,
    channel: str = PROVIDER_CHANNEL,
) -> None:
    # reconnect loop with simple backoff
    backoff = 1
    while not stop.is_set():
        pubsub = None
        try:
            pubsub = client_factory().pubsub()
            pubsub.subscribe(channel)
            logger.info("listening on redis channel: %s", channel)
            backoff = 1
            while not stop.is_set():
                msg = pubsub.get_message(timeout=1.0)
                try:
                    handle_message(msg, on_change)
                except Exception:
                    logger.exception("provider refresh failed")
        except Exception as e:
            logger.error("subscriber error: %s; retrying in %ss", e, backoff)
            stop.wait(backoff)
            backoff = min(backoff * 2, MAX_BACKOFF_SECONDS)
        finally:
            if pubsub is not None:
                try:
                    pubsub.close()
                except Exception as e:
                    logger.debug("pubsub close failed: %s", e)


def start_subscriber(
    client_factory: Callable[[], Redis],
    on_change: Callable[[dict], Any],
    channel: str = PROVIDER_CHANNEL,
) -> tuple[threading.Thread, threading.Event]:
    stop = threading.Event()
    t = threading.Thread(
        target=subscriber_loop,
        args=(client_factory, on_change, stop, channel),
        daemon=True,
    )
    t.start()
    return t, stop
