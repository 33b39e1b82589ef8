# seed_jutsus.py
# Seeds the base jutsu catalogue AI characters can be equipped with.

import logging
from sqlmodel import Session, select
from shinobi_backend.core.database import sync_engine
from shinobi_backend.models.jutsu_model import Jutsu

logger = logging.getLogger(__name__)

JUTSUS = [
    ("fireball", "Fireball"),
    ("shadow-clone", "Shadow Clone"),
    ("substitution", "Substitution"),
    ("chidori", "Chidori"),
    ("rasengan", "Rasengan"),
    ("water-prison", "Water Prison"),
    ("mind-transfer", "Mind Transfer"),
    ("kunai-barrage", "Kunai Barrage"),
]


def seed_jutsus(engine=sync_engine):
    logger.info("🌀 Seeding jutsus...")
    with Session(engine) as session:
        added = 0
        for jutsu_id, name in JUTSUS:
            if session.get(Jutsu, jutsu_id):
                continue
            session.add(Jutsu(id=jutsu_id, name=name))
            added += 1
        session.commit()
    logger.info("✅ %s jutsus seeded.", added)
