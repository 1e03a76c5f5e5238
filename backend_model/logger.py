"""
Logging configuration using Loguru
"""

import sys
from pathlib import Path
from typing import Optional
from loguru import logger

from backend_model.config import Settings, settings


FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}"
SEARCH_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {message}"


def is_search_record(record) -> bool:
    return record["extra"].get("context") == "search"


def setup_logging(config: Optional[Settings] = None):
    """
    Configure logging for the application.

    Console always; with log_to_file, app.log and search.log rotate daily and
    errors.log rotates by size, each pruned after its retention period.
    """
    config = config or settings

    # Remove default handler
    logger.remove()

    # Console handler with color
    logger.add(
        sys.stdout,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>",
        level=config.log_level,
        colorize=True,
    )

    if not config.log_to_file:
        return

    logs_dir = Path(config.logs_dir)
    logs_dir.mkdir(parents=True, exist_ok=True)

    # Request and chat activity
    logger.add(
        logs_dir / "app.log",
        format=FILE_FORMAT,
        level=config.log_level,
        rotation=config.log_rotation,
        retention=config.log_retention,
    )

    # Errors only
    logger.add(
        logs_dir / "errors.log",
        format=FILE_FORMAT,
        level="ERROR",
        rotation="5 MB",
        retention=config.error_log_retention,
        compression="zip",
    )

    # Custom Search calls only, for quota tracking
    logger.add(
        logs_dir / "search.log",
        format=SEARCH_FORMAT,
        level="INFO",
        rotation=config.log_rotation,
        retention=config.log_retention,
        filter=is_search_record,
    )

    logger.info(f"File logging enabled in {logs_dir}")


# Setup logging on module import
setup_logging()

# Export logger for use in other modules
__all__ = ["logger", "setup_logging"]
