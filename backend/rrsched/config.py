import os
from datetime import time

from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() in ("true", "1", "yes")


def _env_time(name: str, default: str) -> time:
    raw = os.getenv(name, default).strip()
    hours, _, minutes = raw.partition(":")
    return time(int(hours), int(minutes or 0))


APP_NAME = "Round Robin Scheduler API"

DEFAULT_FORMAT = os.getenv("RRS_DEFAULT_FORMAT", "pf")

# "round_parity" | "balanced"
SIDE_STRATEGY = os.getenv("RRS_SIDE_STRATEGY", "round_parity")

# When true, a winner can only be recorded on a completed match
STRICT_RESULTS = _env_bool("RRS_STRICT_RESULTS")

DAY_START: time = _env_time("RRS_DAY_START", "09:00")

LOG_LEVEL = os.getenv("RRS_LOG_LEVEL", "INFO").upper()

CORS_ORIGINS = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
]
_extra = os.getenv("CORS_ORIGINS", "")
if _extra:
    CORS_ORIGINS.extend(o.strip() for o in _extra.split(",") if o.strip())
