import os
from typing import List, Optional

from dotenv import load_dotenv

load_dotenv(dotenv_path=".env")

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# CORS (comma separated, "*" for any origin)
CORS_ORIGINS: List[str] = [
    origin.strip() for origin in os.getenv("CORS_ORIGINS", "*").split(",") if origin.strip()
]

# OpenAI (motivational quotes)
OPENAI_API_KEY: Optional[str] = os.getenv("OPENAI_API_KEY")
MOTIVATION_MODEL = os.getenv("MOTIVATION_MODEL", "gpt-4o")

# Timer client
FOCUSHERO_API_URL = os.getenv("FOCUSHERO_API_URL", "http://localhost:8000")
FOCUSHERO_STATE_PATH: Optional[str] = os.getenv("FOCUSHERO_STATE_PATH")
