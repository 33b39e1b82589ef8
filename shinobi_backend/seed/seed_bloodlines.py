# seed_bloodlines.py
# Seeds bloodlines from a CSV file, falling back to a built-in list.

import logging
import os
import pandas as pd
from sqlmodel import Session, select
from shinobi_backend.core.database import sync_engine
from shinobi_backend.models.bloodline_model import Bloodline

logger = logging.getLogger(__name__)

DEFAULT_BLOODLINES = [
    {"id": "uzumaki", "name": "Uzumaki", "regen_increase": 0.5, "description": "Vast chakra reserves."},
    {"id": "senju", "name": "Senju", "regen_increase": 0.8, "description": "Unmatched vitality."},
    {"id": "hyuga", "name": "Hyuga", "regen_increase": 0.2, "description": "All-seeing eyes."},
    {"id": "akimichi", "name": "Akimichi", "regen_increase": 0.3, "description": "Calorie-fuelled giants."},
    {"id": "kaguya", "name": "Kaguya", "regen_increase": 0.4, "description": "Bones that regrow."},
]


def load_bloodlines_csv(csv_path: str) -> list:
    """
    Read bloodlines from a semicolon-separated CSV with columns:
    id;name;regen_increase[;description]
    Rows with missing or non-numeric values are skipped.
    """
    df = pd.read_csv(csv_path, delimiter=";")
    df.columns = [c.strip().lower() for c in df.columns]

    missing = {"id", "name", "regen_increase"} - set(df.columns)
    if missing:
        raise ValueError(f"Bloodline CSV is missing columns: {sorted(missing)}")

    df["regen_increase"] = pd.to_numeric(df["regen_increase"], errors="coerce")
    df = df.dropna(subset=["id", "name", "regen_increase"])
    if "description" not in df.columns:
        df["description"] = None
    df = df.astype(object).where(pd.notna(df), None)

    return [
        {
            "id": str(row["id"]).strip(),
            "name": str(row["name"]).strip(),
            "regen_increase": float(row["regen_increase"]),
            "description": row["description"],
        }
        for row in df.to_dict(orient="records")
    ]


def seed_bloodlines(engine=sync_engine, csv_path: str = "bloodlines.csv"):
    logger.info("🧬 Seeding bloodlines...")

    if os.path.exists(csv_path):
        bloodlines = load_bloodlines_csv(csv_path)
        logger.info("📊 Found %s bloodlines in %s", len(bloodlines), csv_path)
    else:
        logger.info("💡 %s not found, using built-in bloodlines", csv_path)
        bloodlines = DEFAULT_BLOODLINES

    with Session(engine) as session:
        added = 0
        for data in bloodlines:
            if session.exec(select(Bloodline).where(Bloodline.id == data["id"])).first():
                continue
            session.add(Bloodline(**data))
            added += 1
        session.commit()
    logger.info("✅ %s bloodlines seeded.", added)
