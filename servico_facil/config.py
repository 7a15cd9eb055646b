import logging
import os

DB_USER = os.getenv("DB_USER", "servico")
DB_PASS = os.getenv("DB_PASS", "servico")
DB_NAME = os.getenv("DB_NAME", "servico_facil")
DB_HOST = os.getenv("DB_HOST", "postgres")
DB_PORT = os.getenv("DB_PORT", "5432")

DATABASE_URL = os.getenv(
    "DATABASE_URL",
    f"postgresql+psycopg2://{DB_USER}:{DB_PASS}@{DB_HOST}:{DB_PORT}/{DB_NAME}",
)

REDIS_HOST = os.getenv("REDIS_HOST", "redis")
REDIS_PORT = int(os.getenv("REDIS_PORT", "6379"))
REDIS_DB = int(os.getenv("REDIS_DB", "0"))
PROVIDER_CHANNEL = os.getenv("PROVIDER_CHANNEL", "providers.changed")

# Search radius
RADIUS_OPTIONS_KM = (1, 5, 10, 20, 50)
DEFAULT_SEARCH_RADIUS_KM = int(os.getenv("DEFAULT_SEARCH_RADIUS_KM", "5"))

# Rio de Janeiro city centre, used when a location or provider coordinates are missing
FALLBACK_LAT = float(os.getenv("FALLBACK_LAT", "-22.9068"))
FALLBACK_LON = float(os.getenv("FALLBACK_LON", "-43.1729"))

PROVIDER_QUERY_LIMIT = int(os.getenv("PROVIDER_QUERY_LIMIT", "50"))

# Proximity alerts
PROXIMITY_RADIUS_KM = float(os.getenv("PROXIMITY_RADIUS_KM", "5"))
PROXIMITY_COOLDOWN_SECONDS = int(os.getenv("PROXIMITY_COOLDOWN_SECONDS", "1800"))  # 30m

# Service requests broadcast to providers of the same service nearby
SERVICE_REQUEST_RADIUS_KM = float(os.getenv("SERVICE_REQUEST_RADIUS_KM", "5"))
SERVICE_REQUEST_LIST_LIMIT = int(os.getenv("SERVICE_REQUEST_LIST_LIMIT", "50"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")


def configure_logging() -> None:
    logging.basicConfig(
        level=LOG_LEVEL,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
