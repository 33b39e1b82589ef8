import os

# =====================================
# Global configuration for Shinobi
# =====================================

# TEST_MODE:
# When True, testing features are enabled.
# Example uses:
#   - Skip the deletion grace period
#   - Enable admin/debug shortcuts
TEST_MODE = os.getenv("TEST_MODE", "0") == "1"

# --- Database ---
BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
DB_PATH = os.getenv("DB_PATH", os.path.join(BASE_DIR, "shinobi.db"))
DATABASE_URL = os.getenv("DATABASE_URL", f"sqlite+aiosqlite:///{DB_PATH}")  # Async engine (routes)
SYNC_DATABASE_URL = os.getenv("SYNC_DATABASE_URL", f"sqlite:///{DB_PATH}")  # Sync engine (seeding)
SQL_ECHO = os.getenv("SQL_ECHO", "0") == "1"

# --- Logging ---
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# --- Regeneration ---
# Seconds since the last refresh before a read persists regenerated pools
REGEN_REFRESH_SECONDS = int(os.getenv("REGEN_REFRESH_SECONDS", "300"))

# --- Training ---
# Energy converted into stat/experience per second of training
ENERGY_SPENT_PER_SECOND = float(os.getenv("ENERGY_SPENT_PER_SECOND", "0.5"))

# --- Account lifecycle ---
DELETION_DELAY_SECONDS = int(os.getenv("DELETION_DELAY_SECONDS", str(2 * 86400)))

# --- AI defaults ---
DEFAULT_AVATAR = os.getenv(
    "DEFAULT_AVATAR",
    "https://utfs.io/f/630cf6e7-c152-4dea-a3ff-821de76d7f5a_default.webp",
)
AI_DEFAULT_LEVEL = int(os.getenv("AI_DEFAULT_LEVEL", "1"))

# --- Discord audit channel ---
# Empty URL disables the webhook call entirely
DISCORD_WEBHOOK_URL = os.getenv("DISCORD_WEBHOOK_URL", "")
DISCORD_TIMEOUT_SECONDS = float(os.getenv("DISCORD_TIMEOUT_SECONDS", "5"))
