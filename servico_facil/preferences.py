import logging
from typing import Optional, Protocol

from redis import Redis

from .config import DEFAULT_SEARCH_RADIUS_KM, RADIUS_OPTIONS_KM

logger = logging.getLogger(__name__)

SEARCH_RADIUS_KEY = "searchRadius"


class PreferenceStore(Protocol):
    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...


class RedisPreferenceStore:
    def __init__(self, client: Redis, prefix: str = "pref"):
        self.client = client
        self.prefix = prefix

    def _key(self, key: str) -> str:
        return f"{self.prefix}:{key}"

    def get(self, key: str) -> Optional[str]:
        return self.client.get(self._key(key))

    def set(self, key: str, value: str) -> None:
        self.client.set(self._key(key), value)


class MemoryPreferenceStore:
    """Process-local store; contents are lost on restart."""

    def __init__(self):
        self._data: dict[str, str] = {}

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value


def radius_key(device_id: str) -> str:
    return f"{device_id}:{SEARCH_RADIUS_KEY}"


def load_search_radius(store: PreferenceStore, device_id: str) -> int:
    try:
        raw = store.get(radius_key(device_id))
    except Exception as e:
        logger.warning("could not read search radius for %s: %s", device_id, e)
        return DEFAULT_SEARCH_RADIUS_KM

    if raw is None:
        return DEFAULT_SEARCH_RADIUS_KM
    try:
        radius = int(str(raw).strip())
    except ValueError:
        logger.warning("corrupt search radius %r for %s; using default", raw, device_id)
        return DEFAULT_SEARCH_RADIUS_KM
    if radius not in RADIUS_OPTIONS_KM:
        logger.warning("unsupported search radius %s for %s; using default", radius, device_id)
        return DEFAULT_SEARCH_RADIUS_KM
    return radius


def save_search_radius(store: PreferenceStore, device_id: str, radius_km: int) -> None:
    # stored as a plain integer string so load_search_radius can read it back
    if isinstance(radius_km, bool) or not isinstance(radius_km, (int, float)) \
            or radius_km not in RADIUS_OPTIONS_KM:
        raise ValueError(f"radius must be one of {RADIUS_OPTIONS_KM}, got {radius_km!r}")
    store.set(radius_key(device_id), str(int(radius_km)))
