"""Loguru sinks for the goals service, driven by `settings`."""

import sys
from pathlib import Path

from loguru import logger

from weightgoals.config import Settings, settings as default_settings

LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{line} - {message}"


def setup_logger(config: Settings = default_settings) -> None:
    """Replace loguru's default handler with the configured sinks.

    stderr always; a rotating file when `log_file` is set. `log_json` switches
    both to loguru's serialized records for log shippers.
    """
    logger.remove()
    logger.add(
        sys.stderr,
        format=LOG_FORMAT,
        level=config.log_level,
        serialize=config.log_json,
        colorize=not config.log_json,
    )

    if config.log_file:
        log_path = Path(config.log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_path,
            format=LOG_FORMAT,
            level=config.log_level,
            serialize=config.log_json,
            rotation=config.log_rotation,
            retention=config.log_retention,
        )

    logger.debug(f"Logging at {config.log_level}" + (f", file {config.log_file}" if config.log_file else ""))
