from typing import Any, Protocol

from sqlalchemy.orm import Session

from . import models
from .config import PROVIDER_QUERY_LIMIT


class ProviderSource(Protocol):
    def list_available_providers(
        self, role: str = "provider", must_be_profile_complete: bool = True
    ) -> list[dict[str, Any]]: ...


def provider_to_dict(p: models.Provider) -> dict[str, Any]:
    return {
        "uid": p.uid,
        "display_name": p.display_name,
        "service_type": p.service_type,
        "neighborhood": p.neighborhood,
        "photo_url": p.photo_url,
        "rating": p.rating,
        "review_count": p.review_count,
        "status": p.status,
        "latitude": p.lat,
        "longitude": p.lon,
        "is_premium": p.is_premium,
    }


class SqlProviderSource:
    def __init__(self, db: Session, limit: int = PROVIDER_QUERY_LIMIT):
        self.db = db
        self.limit = limit

    def list_available_providers(
        self, role: str = "provider", must_be_profile_complete: bool = True
    ) -> list[dict[str, Any]]:
        q = self.db.query(models.Provider).filter(models.Provider.role == role)
        if must_be_profile_complete:
            q = q.filter(models.Provider.is_profile_complete.is_(True))
        rows = q.order_by(models.Provider.id.desc()).limit(self.limit).all()
        return [provider_to_dict(p) for p in rows]
