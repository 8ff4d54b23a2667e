import logging
import os
from logging.handlers import RotatingFileHandler

from app.platform.config import get_settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _log_file_path() -> str:
    settings = get_settings()
    log_dir = os.path.join(os.getcwd(), settings.LOG_DIR)
    if not os.path.exists(log_dir):
        os.makedirs(log_dir)
    return os.path.join(log_dir, settings.LOG_FILE_NAME)


def get_logger(name: str):
    """
    Creates a logger instance that writes to console and, unless disabled
    with LOG_TO_FILE=false, to a rotating file under LOG_DIR.
    """
    logger = logging.getLogger(name)

    if logger.handlers:
        return logger

    logger.setLevel(logging.INFO)
    formatter = logging.Formatter(LOG_FORMAT)

    if get_settings().LOG_TO_FILE:
        file_handler = RotatingFileHandler(_log_file_path(), maxBytes=10_000_000, backupCount=5)
        file_handler.setFormatter(formatter)
        file_handler.setLevel(logging.INFO)
        logger.addHandler(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    console_handler.setLevel(logging.INFO)
    logger.addHandler(console_handler)

    return logger
