from __future__ import annotations

import os
from dataclasses import dataclass

DEFAULT_SITE_BASE_URL = "https://progbase.herokuapp.com"
DEFAULT_CAT_API_URL = "http://random.cat/meow"
DEFAULT_NOTIFY_POLL_SECONDS = 30.0

@dataclass(frozen=True)
class Config:
    bot_token: str
    data_dir: str
    log_level: str
    site_base_url: str
    cat_api_url: str
    notify_poll_seconds: float

def _read_poll_seconds() -> float:
    """
    NOTIFY_POLL_SECONDS: seconds between grading-watcher ticks.
    0 disables the watcher; garbage or negatives fall back to the default.
    """
    raw = (os.getenv("NOTIFY_POLL_SECONDS") or "").strip()
    if not raw:
        return DEFAULT_NOTIFY_POLL_SECONDS
    try:
        value = float(raw)
    except ValueError:
        return DEFAULT_NOTIFY_POLL_SECONDS
    return value if value >= 0 else DEFAULT_NOTIFY_POLL_SECONDS

def load_config() -> Config:
    from dotenv import load_dotenv
    load_dotenv()

    token = (os.getenv("BOT_TOKEN") or "").strip()
    if not token:
        raise RuntimeError("BOT_TOKEN is not set in environment")

    data_dir = os.getenv("DATA_DIR", "./data")
    log_level = (os.getenv("LOG_LEVEL", "INFO") or "INFO").upper()
    site_base_url = (os.getenv("SITE_BASE_URL") or DEFAULT_SITE_BASE_URL).strip().rstrip("/")
    cat_api_url = (os.getenv("CAT_API_URL") or DEFAULT_CAT_API_URL).strip()

    os.makedirs(data_dir, exist_ok=True)

    return Config(
        bot_token=token,
        data_dir=data_dir,
        log_level=log_level,
        site_base_url=site_base_url,
        cat_api_url=cat_api_url,
        notify_poll_seconds=_read_poll_seconds(),
    )
