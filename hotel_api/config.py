# ============================================================
# config.py — Environment configuration
# ------------------------------------------------------------
# Every setting is read once from the environment with a
# development default, so the server runs with no setup.
# ============================================================
import os

# JSON document acting as the database
DB_PATH = os.getenv("DB_PATH", "db.json")

HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "3000"))

# Every route is also mounted under this prefix ("" disables it)
API_PREFIX = os.getenv("API_PREFIX", "/api/v1")

# Header carrying the hotel id used for tenant filtering
TENANT_HEADER = os.getenv("TENANT_HEADER", "X-Hotel-Id")

CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_FORMAT = os.getenv("LOG_FORMAT", "console")  # console | json
