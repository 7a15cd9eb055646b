import logging
import time
from dataclasses import dataclass
from typing import Callable, Iterable, Optional

from .config import PROXIMITY_COOLDOWN_SECONDS, PROXIMITY_RADIUS_KM
from .discovery import ProviderRecord, ProviderStatus, compute_distances
from .location import Location

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProximityAlert:
    user_id: str
    provider_uid: str
    provider_name: str
    service_type: str
    distance_km: float
    title: str
    message: str


def matches_interests(service_type: str, interests: Iterable[str]) -> bool:
    interests = [i for i in interests if i]
    if not interests:
        return True
    st = service_type.lower()
    return any(i.lower() in st for i in interests)


class ProximityNotifier:
    """Picks nearby available providers to alert a user about.

    Each (user, provider) pair is alerted at most once per cooldown window.
    Delivery is up to the caller.
    """

    def __init__(
        self,
        radius_km: float = PROXIMITY_RADIUS_KM,
        cooldown_seconds: int = PROXIMITY_COOLDOWN_SECONDS,
        clock: Callable[[], float] = time.time,
    ):
        self.radius_km = radius_km
        self.cooldown_seconds = cooldown_seconds
        self.clock = clock
        self._last_sent: dict[str, float] = {}

    def reset(self) -> None:
        self._last_sent.clear()

    def _prune(self, now: float) -> None:
        expired = [k for k, t in self._last_sent.items() if now - t >= self.cooldown_seconds]
        for k in expired:
            del self._last_sent[k]

    def check(
        self,
        user_id: str,
        location: Location,
        providers: Iterable[ProviderRecord],
        interests: Optional[Iterable[str]] = None,
    ) -> list[ProximityAlert]:
        interests = list(interests or [])
        candidates = [
            p for p in providers
            if p.uid != user_id and p.status == ProviderStatus.available
        ]

        alerts: list[ProximityAlert] = []
        now = self.clock()
        self._prune(now)
        for p in compute_distances(location, candidates):
            if p.distance_km > self.radius_km or not matches_interests(p.service_type, interests):
                continue

            key = f"{user_id}_{p.uid}"
            last = self._last_sent.get(key)
            if last is not None and now - last < self.cooldown_seconds:
                continue

            alert = ProximityAlert(
                user_id=user_id,
                provider_uid=p.uid,
                provider_name=p.display_name,
                service_type=p.service_type,
                distance_km=p.distance_km,
                title=f"{p.service_type} próximo!",
                message=f"{p.display_name} está a {p.distance_km}km de você",
            )
            self._last_sent[key] = now
            alerts.append(alert)
            logger.info("[PROXIMITY] uid=%s -> %s (%.1f km)", user_id, p.uid, p.distance_km)
        return alerts
