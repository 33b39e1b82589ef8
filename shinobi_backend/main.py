import logging

from fastapi import FastAPI
from sqlmodel import select, Session

from shinobi_backend.core.database import init_db, sync_engine, engine
from shinobi_backend.core.logging_config import setup_logging
from shinobi_backend.seed.seed_all import seed_all
from shinobi_backend.models.bloodline_model import Village
from shinobi_backend.services.user_service import drain_background_writes

# --- Routers ---
from shinobi_backend.routes.profile_routes import router as profile_router

logger = logging.getLogger(__name__)

app = FastAPI(title="Shinobi Backend")


@app.on_event("startup")
async def on_startup():
    setup_logging()

    # 1️⃣ Init DB tables async
    await init_db()

    # 2️⃣ Auto-seed DB in sync mode
    with Session(sync_engine) as session:
        village_count = len(session.exec(select(Village)).all())
    if village_count == 0:
        logger.info("🌱 No villages found. Auto-seeding database...")
        seed_all()  # ✅ Uses sync engine only
    else:
        logger.info("✅ Database already seeded. Skipping auto-seed.")


@app.on_event("shutdown")
async def on_shutdown():
    # Let pending regeneration write-backs land before the engine goes away
    await drain_background_writes()
    await engine.dispose()


# Routers
app.include_router(profile_router, prefix="/profile", tags=["Profile"])
