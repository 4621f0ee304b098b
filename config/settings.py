import os

def env_bool(key, default=False):
    return os.getenv(key, str(default)).lower() in ("1", "true", "yes", "on")

def env_int(key, default):
    try:
        return int(os.getenv(key, default))
    except (TypeError, ValueError):
        return default

def env_float(key, default):
    try:
        return float(os.getenv(key, default))
    except (TypeError, ValueError):
        return default

SECRET_KEY = os.getenv("SECRET_KEY", "dev")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_DIR = os.getenv("LOG_DIR", os.path.join(os.getcwd(), "logs"))
LOG_TO_FILE = env_bool("LOG_TO_FILE", True)

# Upstream recruitment API serving a precomputed statistics aggregate.
# Leave STATS_API_URL unset to always compute statistics locally.
STATS_API_URL = (os.getenv("STATS_API_URL") or "").strip().rstrip("/")
STATS_API_TOKEN = (os.getenv("STATS_API_TOKEN") or "").strip()
STATS_API_TIMEOUT = env_float("STATS_API_TIMEOUT", 10.0)

DEFAULT_PAGE_SIZE = env_int("DEFAULT_PAGE_SIZE", 20)
MAX_PAGE_SIZE = env_int("MAX_PAGE_SIZE", 100)

# CDI, CDD, FREELANCE, STAGE
TOTAL_CATEGORIES = env_int("TOTAL_CATEGORIES", 4)
