"""Process-wide logging: console plus a size-capped file under `log_dir`."""
import logging, os
from logging.handlers import RotatingFileHandler

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"
LOG_FILE = "scorebot.log"
LOG_FILE_MAX_BYTES = 2_000_000
LOG_FILE_BACKUPS = 3

def _level(name: str) -> int:
    value = logging.getLevelName((name or "").upper())
    return value if isinstance(value, int) else logging.INFO

def setup_logging(level: str = "INFO", log_dir: str = "logs") -> None:
    os.makedirs(log_dir, exist_ok=True)
    file_handler = RotatingFileHandler(
        os.path.join(log_dir, LOG_FILE),
        maxBytes=LOG_FILE_MAX_BYTES,
        backupCount=LOG_FILE_BACKUPS,
        encoding="utf-8",
    )
    logging.basicConfig(
        level=_level(level),
        format=LOG_FORMAT,
        datefmt=LOG_DATEFMT,
        handlers=[logging.StreamHandler(), file_handler],
    )
    # aiogram's DEBUG output drowns the command log
    logging.getLogger("aiogram.event").setLevel(logging.INFO)
