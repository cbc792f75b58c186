"""
Application configuration from environment variables.
"""

import os

APP_NAME = os.getenv("APP_NAME", "LevelUp")

# An empty DATABASE_URL leaves the database unconfigured; data endpoints answer 503.
DATABASE_URL = os.getenv("DATABASE_URL", "")
DATABASE_MIN_POOL_SIZE = int(os.getenv("DATABASE_MIN_POOL_SIZE", "1"))
DATABASE_MAX_POOL_SIZE = int(os.getenv("DATABASE_MAX_POOL_SIZE", "10"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "http://localhost:3000").split(",")
    if origin.strip()
]

# Simulated latency of the mock match analysis, in seconds
ANALYSIS_DELAY_SECONDS = float(os.getenv("ANALYSIS_DELAY_SECONDS", "2.5"))
