"""Loguru sinks for applications embedding coachboard.

Engine modules only emit through `loguru.logger`; importing them never
touches the sink configuration. The host process calls `setup_logger` once
at startup to route those messages.
"""

import sys
from pathlib import Path

from loguru import logger

from coachboard.config.settings import settings

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {name}:{function}:{line} - {message} | {extra}"


def setup_logger(
    level: str | None = None,
    log_file: str | Path | None = None,
    rotation: str = "10 MB",
    retention: str = "7 days",
) -> list[int]:
    """Replace loguru's sinks with a stderr sink and an optional rotating file.

    Args:
        level: Minimum level; defaults to settings.log_level (LOG_LEVEL)
        log_file: Optional log file path; parent directories are created
        rotation: When the file sink rotates (e.g., "10 MB", "1 day")
        retention: How long rotated files are kept (e.g., "7 days")

    Returns:
        Handler ids of the sinks added, so callers can remove them again
    """
    resolved_level = (level or settings.log_level).upper()
    logger.remove()

    handler_ids = [logger.add(sys.stderr, format=CONSOLE_FORMAT, level=resolved_level, colorize=True)]
    if log_file is not None:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        handler_ids.append(
            logger.add(
                path,
                format=FILE_FORMAT,
                level=resolved_level,
                rotation=rotation,
                retention=retention,
                compression="zip",
            )
        )

    logger.debug(f"[LOGGER] Configured {len(handler_ids)} sinks at level={resolved_level}", log_file=str(log_file))
    return handler_ids
