# backend/config.py

import os
from dotenv import load_dotenv

# ─── Load .env ─────────────────────────────────────────────────────────────────
load_dotenv()

SERVER_HOST = os.getenv("SERVER_HOST", "127.0.0.1")
SERVER_PORT = int(os.getenv("SERVER_PORT", "2022"))

# SQLite file in the working directory unless overridden
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./chat_app.db")

CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv(
        "CORS_ORIGINS", "http://localhost:5173,http://127.0.0.1:5173"
    ).split(",")
    if origin.strip()
]

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
