import logging

from fastapi import Depends, FastAPI
from redis import Redis
from sqlalchemy import text
from sqlalchemy.orm import Session

from .catalog import NEIGHBORHOODS, SERVICES
from .config import DEFAULT_SEARCH_RADIUS_KM, RADIUS_OPTIONS_KM, configure_logging
from .db import get_db
from .deps import get_redis
from .routers import preferences, premium, providers, proximity, reviews, search, service_requests

configure_logging()
logger = logging.getLogger(__name__)

app = FastAPI(title="Serviço Fácil Discovery Service", version="0.1.0")


@app.get("/health")
def health(r: Redis = Depends(get_redis)):
    try:
        r.ping()
    except Exception:
        return {"status": "degraded"}  # discovery still works; radius falls back to default
    return {"status": "ok"}


@app.get("/ready")
def ready(db: Session = Depends(get_db), r: Redis = Depends(get_redis)):
    try:
        db.execute(text("SELECT 1"))
        r.ping()
        return {"ready": True}
    except Exception as e:
        logger.warning("not ready: %s", e)
        return {"ready": False}


@app.get("/metadata")
def metadata():
    return {
        "services": SERVICES,
        "neighborhoods": NEIGHBORHOODS,
        "radius_options": list(RADIUS_OPTIONS_KM),
        "default_radius_km": DEFAULT_SEARCH_RADIUS_KM,
    }


app.include_router(providers.router)
app.include_router(reviews.router)
app.include_router(premium.router)
app.include_router(search.router)
app.include_router(preferences.router)
app.include_router(proximity.router)
app.include_router(service_requests.router)
