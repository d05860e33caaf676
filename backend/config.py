# Environment configuration - loaded from .env for local runs
import os
from dotenv import load_dotenv

load_dotenv()

# Directory text IDN reports are read from when ingested by document name
DOCUMENTS_PATH = os.environ.get("DOCUMENTS_PATH", "./uploads/idn-reports")

# Extra CORS origin for the deployed frontend
FRONTEND_URL = os.environ.get("FRONTEND_URL", "")

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()


def is_demo_mode() -> bool:
    """True only when DEMO_MODE env var is explicitly 'true' (case-insensitive)."""
    return os.environ.get("DEMO_MODE", "").lower() == "true"
