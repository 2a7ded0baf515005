"""
Configuration for the tee sheet engine.
Values come from the environment (optionally a .env file) with sensible defaults.
"""

import os
from dotenv import load_dotenv

load_dotenv()

# Database
DATABASE_URL = os.getenv("DATABASE_URL")

# Tee sheet defaults
DEFAULT_START_TIME = os.getenv("TEE_SHEET_START_TIME", "08:00")
DEFAULT_INTERVAL_MINUTES = int(os.getenv("TEE_SHEET_INTERVAL_MINUTES", "8"))
DEFAULT_ALLOWANCE_PERCENT = float(os.getenv("TEE_SHEET_ALLOWANCE_PERCENT", "100"))

# Allowance used when an event only carries the legacy non-100% fraction
LEGACY_REDUCED_ALLOWANCE_PERCENT = 90.0

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# API
CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "http://localhost:5173").split(",")
    if origin.strip()
]
