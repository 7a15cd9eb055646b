from .db import SessionLocal
from .models import Provider

DEMO_PROVIDERS = [
    dict(display_name="João Silva", service_type="Eletricista", neighborhood="Centro",
         rating=4.8, review_count=23, lat=-22.9035, lon=-43.1780, is_premium=True),
    dict(display_name="Maria Santos", service_type="Diarista", neighborhood="Copacabana",
         rating=4.6, review_count=41, lat=-22.9711, lon=-43.1822),
    dict(display_name="Carlos Pereira", service_type="Encanador", neighborhood="Tijuca",
         rating=4.2, review_count=9, lat=-22.9250, lon=-43.2320, status="busy"),
    dict(display_name="Ana Costa", service_type="Pintor", neighborhood="Botafogo",
         rating=4.9, review_count=15, lat=-22.9519, lon=-43.1840),
]


def run():
    db = SessionLocal()
    try:
        if db.query(Provider).count() == 0:
            for data in DEMO_PROVIDERS:
                db.add(Provider(role="provider", is_profile_complete=True, **data))
            db.commit()
    finally:
        db.close()


if __name__ == "__main__":
    run()
