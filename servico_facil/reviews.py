import logging
from typing import Optional

from sqlalchemy.orm import Session

from . import models

logger = logging.getLogger(__name__)


def get_provider(db: Session, uid: str) -> Optional[models.Provider]:
    return db.query(models.Provider).filter(models.Provider.uid == uid).first()


def add_review(
    db: Session,
    provider_uid: str,
    client_id: str,
    client_name: str,
    rating: int,
    comment: str = "",
) -> Optional[models.Review]:
    """Store a review and fold it into the provider's running average.

    Returns None when the provider does not exist.
    """
    provider = get_provider(db, provider_uid)
    if provider is None:
        return None

    review = models.Review(
        provider_uid=provider_uid,
        client_id=client_id,
        client_name=client_name,
        rating=rating,
        comment=comment,
    )
    db.add(review)

    count = provider.review_count or 0
    current = provider.rating or 0.0
    new_count = count + 1
    provider.rating = round((current * count + rating) / new_count, 1)
    provider.review_count = new_count

    db.commit()
    db.refresh(review)
    logger.info("review #%s for %s: %s stars (avg now %.1f over %d)",
                review.id, provider_uid, rating, provider.rating, new_count)
    return review


def list_provider_reviews(db: Session, provider_uid: str) -> list[models.Review]:
    return (
        db.query(models.Review)
        .filter(models.Review.provider_uid == provider_uid)
        .order_by(models.Review.created_at.desc(), models.Review.id.desc())
        .all()
    )


def list_client_reviews(db: Session, client_id: str) -> list[models.Review]:
    return (
        db.query(models.Review)
        .filter(models.Review.client_id == client_id)
        .order_by(models.Review.created_at.desc(), models.Review.id.desc())
        .all()
    )
