from __future__ import annotations
import os
from dotenv import load_dotenv

load_dotenv()

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./data/surveys.db")

# 5 submissions per client every 15 minutes
SUBMIT_RATE_LIMIT = int(os.getenv("SUBMIT_RATE_LIMIT", "5"))
SUBMIT_RATE_WINDOW_S = int(os.getenv("SUBMIT_RATE_WINDOW_S", str(15 * 60)))

MIN_AGE, MAX_AGE = 5, 120
