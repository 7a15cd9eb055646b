"""Log the ranked provider list every time providers change.

    python -m servico_facil.watch --lat -22.91 --lon -43.18 --service Eletricista
"""
import argparse
import logging

from redis import Redis

from .config import REDIS_DB, REDIS_HOST, REDIS_PORT, configure_logging
from .db import SessionLocal
from .discovery import SearchCriteria
from .live import LiveDiscovery, start_subscriber
from .location import StaticLocationProvider
from .sources import SqlProviderSource

logger = logging.getLogger(__name__)


class _SessionSource:
    """Opens a fresh session per snapshot so each refresh sees committed data."""

    def list_available_providers(self, role="provider", must_be_profile_complete=True):
        db = SessionLocal()
        try:
            return SqlProviderSource(db).list_available_providers(role, must_be_profile_complete)
        finally:
            db.close()


def _log_result(ranked):
    logger.info("%d providers:", len(ranked))
    for p in ranked:
        logger.info("  %s%s | %s | %s km", "* " if p.is_premium else "", p.display_name,
                    p.service_type, p.distance_km if p.distance_km is not None else "?")


def build_location_provider(lat, lon):
    # no coordinates means "location unknown", same as POST /search/providers
    if lat is None and lon is None:
        return None
    return StaticLocationProvider(lat, lon)


def main(argv=None):
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--lat", type=float)
    parser.add_argument("--lon", type=float)
    parser.add_argument("--radius", type=float)
    parser.add_argument("--service")
    parser.add_argument("--neighborhood")
    parser.add_argument("--text")
    args = parser.parse_args(argv)

    configure_logging()
    live = LiveDiscovery(
        source_factory=_SessionSource,
        location_provider=build_location_provider(args.lat, args.lon),
        criteria=SearchCriteria(args.service, args.neighborhood, args.text, args.radius),
        on_result=_log_result,
    )
    live.refresh()

    thread, stop = start_subscriber(
        lambda: Redis(host=REDIS_HOST, port=REDIS_PORT, db=REDIS_DB, decode_responses=True),
        live.refresh,
    )
    try:
        thread.join()
    except KeyboardInterrupt:
        stop.set()


if __name__ == "__main__":
    main()
