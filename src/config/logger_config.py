import os
import sys
from pathlib import Path

from dotenv import load_dotenv
from loguru import logger

load_dotenv()

log_level = os.getenv("WIKILINKS_LOG_LEVEL", "WARNING").upper()
log_dir = os.getenv("WIKILINKS_LOG_DIR")

logger.remove()
logger.add(sys.stderr, level=log_level)

if log_dir:
    log_file = Path(log_dir) / "wikilinks_{time}.log"
    logger.add(
        log_file,
        rotation="64 MB",  # split once a file reaches 64MB
        retention="10 days",
        compression="zip",
        encoding="utf-8",
        level="DEBUG",
    )
