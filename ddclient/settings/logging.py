"""Logging configuration."""

import sys
from pathlib import Path

from loguru import logger

from ddclient.settings import LOG_DIR


def setup_logging(
    level: str = "INFO",
    to_file: bool = False,
    log_dir: Path = LOG_DIR,
    replace_sinks: bool = False,
):
    """Enable ddclient log records and add console and optional file sinks.

    Sinks already configured by the application stay in place unless
    ``replace_sinks`` is set.
    """
    logger.enable("ddclient")
    if replace_sinks:
        logger.remove()

    logger.add(
        sys.stderr,
        format="<green>{time:HH:mm:ss}</green> | <level>{level: <7}</level> | <level>{message}</level>",
        level=level,
        colorize=True,
        filter="ddclient",
    )

    if to_file:
        log_dir.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_dir / "ddclient_{time:YYYY-MM-DD}.log",
            format="{time:YYYY-MM-DD HH:mm:ss} | {level: <7} | {name}:{function}:{line} | {message}",
            level="DEBUG",
            rotation="00:00",
            retention="7 days",
            compression="gz",
            filter="ddclient",
        )
        logger.info("Logging to {}", log_dir)

    return logger
