import logging
from dataclasses import dataclass
from typing import Optional, Protocol

from .config import FALLBACK_LAT, FALLBACK_LON

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Location:
    latitude: float
    longitude: float


DEFAULT_LOCATION = Location(FALLBACK_LAT, FALLBACK_LON)


class LocationProvider(Protocol):
    def get_current_location(self) -> Location:
        """Return the caller's position. May raise on permission or lookup failure."""
        ...


class StaticLocationProvider:
    """Location known up front, e.g. coordinates sent with a request."""

    def __init__(self, latitude: Optional[float], longitude: Optional[float]):
        self.latitude = latitude
        self.longitude = longitude

    def get_current_location(self) -> Location:
        if self.latitude is None or self.longitude is None:
            raise LookupError("location not provided")
        return Location(float(self.latitude), float(self.longitude))


def resolve_location(provider: LocationProvider, fallback: Location = DEFAULT_LOCATION) -> Location:
    try:
        return provider.get_current_location()
    except Exception as e:
        logger.warning("location unavailable (%s); using fallback %s", e, fallback)
        return fallback
