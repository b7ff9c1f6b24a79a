import logging
import logging.handlers

from .config import LogConfig

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
MAX_LOG_BYTES = 1024 * 1024


def setup_logging(config: LogConfig) -> None:
    """Send the editor's log records to the configured file.

    The terminal belongs to the editor while it runs, so without a log file
    records are dropped instead of being printed.
    """
    logger = logging.getLogger("rawedit")
    logger.handlers.clear()
    logger.propagate = config.file is None

    if config.file is None:
        logger.addHandler(logging.NullHandler())
        return

    handler = logging.handlers.RotatingFileHandler(
        config.file.expanduser(), maxBytes=MAX_LOG_BYTES, backupCount=1
    )
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(config.level.upper())
