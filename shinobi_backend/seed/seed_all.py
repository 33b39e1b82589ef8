# seed_all.py
# Orchestrates all seed scripts to populate the database in the correct order.

import logging

from shinobi_backend.core.database import sync_engine
from shinobi_backend.seed.seed_villages import seed_villages
from shinobi_backend.seed.seed_bloodlines import seed_bloodlines
from shinobi_backend.seed.seed_jutsus import seed_jutsus

logger = logging.getLogger(__name__)


def seed_all(engine=sync_engine):
    logger.info("🌱 Starting full database seeding...")

    logger.info("➡️  Step 1: Seeding villages...")
    seed_villages(engine)

    logger.info("➡️  Step 2: Seeding bloodlines...")
    seed_bloodlines(engine)

    logger.info("➡️  Step 3: Seeding jutsus...")
    seed_jutsus(engine)

    logger.info("🎉 Database seeding complete.")


if __name__ == "__main__":
    from shinobi_backend.core.logging_config import setup_logging
    from sqlmodel import SQLModel
    from shinobi_backend import models  # noqa: F401

    setup_logging()
    SQLModel.metadata.create_all(sync_engine)
    seed_all()
