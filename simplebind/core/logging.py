import sys
import os
from typing import Optional
from loguru import logger

from .config import config


def setup_logging(debug_mode: Optional[bool] = None, log_dir: Optional[str] = None):
    """
    Configures Loguru logger.

    The library itself only emits records; applications call this once to get
    console output and, when a log directory is set, a rotating file log.
    Arguments left as None fall back to the `logging` config section.
    """
    settings = config.data.logging
    if debug_mode is None:
        debug_mode = settings.debug_mode
    if log_dir is None:
        log_dir = settings.log_dir

    # Remove default handler
    logger.remove()

    # Console Handler
    level = "DEBUG" if debug_mode else "INFO"
    logger.add(sys.stderr, level=level, format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>")

    # File Handler
    if log_dir:
        if not os.path.exists(log_dir):
            os.makedirs(log_dir)
        logger.add(os.path.join(log_dir, "simplebind_{time}.log"), rotation="10 MB", retention="1 week", level="DEBUG")

    logger.info("Logging initialized.")
