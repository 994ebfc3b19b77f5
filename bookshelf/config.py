"""
Settings loaded from the environment (and a local .env file, if present).
"""

import os

from dotenv import load_dotenv

load_dotenv()

# MongoDB
MONGO_URI: str = os.getenv("MONGO_URI", "mongodb://localhost:27017/")
MONGO_DB: str = os.getenv("MONGO_DB", "library")
MONGO_COLLECTION: str = os.getenv("MONGO_COLLECTION", "books")
MONGO_TIMEOUT_MS: int = int(os.getenv("MONGO_TIMEOUT_MS", "5000"))

# Logging
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

# Seeding
SEED_FAKE_BOOKS: int = int(os.getenv("SEED_FAKE_BOOKS", "20"))
SEED_LOCALE: str = os.getenv("SEED_LOCALE", "en_US")
