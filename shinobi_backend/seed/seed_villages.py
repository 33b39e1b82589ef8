# seed_villages.py
# Seeds the hidden villages.

import logging
from sqlmodel import Session, select
from shinobi_backend.core.database import sync_engine
from shinobi_backend.models.bloodline_model import Village

logger = logging.getLogger(__name__)

VILLAGES = [
    {"id": "konoki", "name": "Konoki", "sector": 1},
    {"id": "shroud", "name": "Shroud", "sector": 2},
    {"id": "silence", "name": "Silence", "sector": 3},
    {"id": "current", "name": "Current", "sector": 4},
    {"id": "shine", "name": "Shine", "sector": 5},
]


def seed_villages(engine=sync_engine):
    logger.info("🏯 Seeding villages...")
    with Session(engine) as session:
        added = 0
        for data in VILLAGES:
            if session.exec(select(Village).where(Village.id == data["id"])).first():
                continue
            session.add(Village(**data))
            added += 1
        session.commit()
    logger.info("✅ %s villages seeded.", added)
