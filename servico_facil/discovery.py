"""
Proximity-ranked provider discovery.

Responsibilities:
- Drop provider records missing a display name, service type or neighbourhood.
- Annotate providers with their haversine distance from the caller.
- Apply the service type / neighbourhood / free-text / radius filters.
- Order premium providers first, then nearest first.

Every function here is pure: inputs are never mutated and nothing is cached,
so a refresh is a full recomputation over the latest provider snapshot.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass, fields
from enum import Enum
from typing import Any, Iterable, Mapping

from .location import DEFAULT_LOCATION, Location

logger = logging.getLogger(__name__)

EARTH_RADIUS_KM = 6371.0

REQUIRED_FIELDS = ("display_name", "service_type", "neighborhood")


class ProviderStatus(str, Enum):
    available = "available"
    busy = "busy"


# Portuguese values written by older app builds
_STATUS_ALIASES = {
    "disponivel": ProviderStatus.available,
    "ocupado": ProviderStatus.busy,
}


@dataclass(frozen=True)
class ProviderRecord:
    uid: str
    display_name: str
    service_type: str
    neighborhood: str
    rating: float = 0.0
    review_count: int = 0
    status: ProviderStatus = ProviderStatus.available
    latitude: float = DEFAULT_LOCATION.latitude
    longitude: float = DEFAULT_LOCATION.longitude
    is_premium: bool = False
    photo_url: str | None = None


@dataclass(frozen=True)
class RankedProvider(ProviderRecord):
    distance_km: float | None = None


@dataclass(frozen=True)
class SearchCriteria:
    service_type_filter: str | None = None
    neighborhood_filter: str | None = None
    search_text: str | None = None
    radius_km: float | None = None


def _parse_status(value: Any) -> ProviderStatus:
    if isinstance(value, ProviderStatus):
        return value
    if not value:
        return ProviderStatus.available
    key = str(value).strip().lower()
    if key in _STATUS_ALIASES:
        return _STATUS_ALIASES[key]
    try:
        return ProviderStatus(key)
    except ValueError:
        logger.debug("unknown provider status %r; treating as available", value)
        return ProviderStatus.available


def normalize_records(
    raw: Iterable[Mapping[str, Any]],
    fallback: Location = DEFAULT_LOCATION,
) -> list[ProviderRecord]:
    """Turn raw provider rows into ProviderRecords, applying field defaults.

    Rows missing any of REQUIRED_FIELDS are skipped; this is a data-quality
    filter, so nothing is raised.
    """
    records: list[ProviderRecord] = []
    for row in raw:
        if not all(row.get(f) for f in REQUIRED_FIELDS):
            logger.debug("skipping incomplete provider %s", row.get("uid"))
            continue

        lat = row.get("latitude")
        lon = row.get("longitude")
        records.append(ProviderRecord(
            uid=str(row.get("uid", "")),
            display_name=row["display_name"],
            service_type=row["service_type"],
            neighborhood=row["neighborhood"],
            rating=float(row.get("rating") or 0.0),
            review_count=int(row.get("review_count") or 0),
            status=_parse_status(row.get("status")),
            latitude=float(lat) if lat is not None else fallback.latitude,
            longitude=float(lon) if lon is not None else fallback.longitude,
            is_premium=bool(row.get("is_premium") or False),
            photo_url=row.get("photo_url"),
        ))
    return records


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance in km on a spherical Earth, rounded to 0.1 km."""
    d_lat = math.radians(lat2 - lat1)
    d_lon = math.radians(lon2 - lon1)
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(d_lon / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return round(EARTH_RADIUS_KM * c, 1)


def _with_distance(record: ProviderRecord, distance_km: float | None) -> RankedProvider:
    values = {f.name: getattr(record, f.name) for f in fields(ProviderRecord)}
    return RankedProvider(**values, distance_km=distance_km)


def compute_distances(
    caller_location: Location | None,
    providers: Iterable[ProviderRecord],
) -> list[RankedProvider]:
    """Annotate each provider with its distance from the caller.

    With no caller location every distance stays None, which later turns the
    radius filter into a no-op and sorts by premium flag only.
    """
    if caller_location is None:
        return [_with_distance(p, None) for p in providers]
    return [
        _with_distance(
            p,
            haversine_km(caller_location.latitude, caller_location.longitude, p.latitude, p.longitude),
        )
        for p in providers
    ]


def _sort_key(p: RankedProvider) -> tuple[bool, bool, float]:
    # premium first, then known distances ascending, unknown distances last
    return (not p.is_premium, p.distance_km is None, p.distance_km or 0.0)


def rank(providers: Iterable[RankedProvider], criteria: SearchCriteria) -> list[RankedProvider]:
    filtered = list(providers)

    if criteria.service_type_filter:
        needle = criteria.service_type_filter.lower()
        filtered = [p for p in filtered if needle in p.service_type.lower()]

    if criteria.neighborhood_filter:
        filtered = [p for p in filtered if p.neighborhood == criteria.neighborhood_filter]

    if criteria.search_text:
        needle = criteria.search_text.lower()
        filtered = [
            p for p in filtered
            if needle in p.display_name.lower() or needle in p.service_type.lower()
        ]

    if criteria.radius_km is not None:
        filtered = [
            p for p in filtered
            if p.distance_km is None or p.distance_km <= criteria.radius_km
        ]

    return sorted(filtered, key=_sort_key)


def discover(
    caller_location: Location | None,
    raw_records: Iterable[Mapping[str, Any]],
    criteria: SearchCriteria,
    fallback: Location = DEFAULT_LOCATION,
) -> list[RankedProvider]:
    raw_records = list(raw_records)
    records = normalize_records(raw_records, fallback=fallback)
    ranked = rank(compute_distances(caller_location, records), criteria)
    logger.debug(
        "discovery: %d raw -> %d complete -> %d ranked (location_known=%s)",
        len(raw_records),
        len(records),
        len(ranked),
        caller_location is not None,
    )
    return ranked
