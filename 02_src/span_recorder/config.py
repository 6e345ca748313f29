"""Project-level configuration and path helpers."""

import os
from pathlib import Path
from typing import Union

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
DATA_DIR = PROJECT_ROOT / "03_data"
LOGS_DIR = PROJECT_ROOT / "04_logs"
DEFAULT_DB_PATH = DATA_DIR / "spans.db"
DEFAULT_LOG_PATH = LOGS_DIR / "recorder.log"

# 60 seconds in microseconds
DEFAULT_TIMEOUT_US = 60 * 1_000_000
SWEEP_INTERVAL_SECONDS = 1.0
DEFAULT_FLUSH_INTERVAL_SECONDS = 1.0
DEFAULT_MAX_QUEUE_SIZE = 10_000


PathLike = Union[str, Path]


def resolve_db_path(env_value: PathLike | None = None) -> PathLike:
    """Resolve DATABASE_URL to an absolute path."""
    if not env_value:
        return DEFAULT_DB_PATH

    if str(env_value) == ":memory:":
        return ":memory:"

    candidate = Path(env_value)
    return candidate if candidate.is_absolute() else PROJECT_ROOT / candidate


def resolve_timeout(env_value: str | None = None) -> int:
    """Resolve RECORDER_TIMEOUT_US to microseconds."""
    if env_value is None:
        env_value = os.getenv("RECORDER_TIMEOUT_US")
    if not env_value:
        return DEFAULT_TIMEOUT_US

    timeout = int(env_value)
    if timeout <= 0:
        raise ValueError(f"RECORDER_TIMEOUT_US must be positive, got {timeout}")
    return timeout


def parse_default_tags(env_value: str | None = None) -> dict[str, str]:
    """Parse RECORDER_DEFAULT_TAGS ("k=v,k2=v2") into a dict."""
    if env_value is None:
        env_value = os.getenv("RECORDER_DEFAULT_TAGS", "")

    tags = {}
    for item in env_value.split(","):
        item = item.strip()
        if not item:
            continue
        key, sep, value = item.partition("=")
        if not sep or not key.strip():
            raise ValueError(f"Invalid default tag {item!r}, expected key=value")
        tags[key.strip()] = value.strip()
    return tags
