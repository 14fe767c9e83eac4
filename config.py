import os
from dotenv import load_dotenv

# Load environment variables from .env
load_dotenv()


def get_float_var(name: str, default: float) -> float:
    """Read a numeric environment variable, raising a clear error if it is malformed."""
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        raise RuntimeError(
            f"❌ Environment variable {name} must be a number, got {raw!r}"
        )


# Optional vars (with defaults)
DEBUG = os.getenv("DEBUG", "false").lower() == "true"
PORT = int(os.getenv("PORT", "8000"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Without a database the service still classifies, it just cannot persist
DATABASE_URL = os.getenv("DATABASE_URL")

# Seconds
PROJECT_LOOKUP_TIMEOUT = get_float_var("PROJECT_LOOKUP_TIMEOUT", 5.0)
PERSIST_TIMEOUT = get_float_var("PERSIST_TIMEOUT", 30.0)
