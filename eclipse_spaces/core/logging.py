import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from eclipse_spaces.app_storage import app_dir
from eclipse_spaces.constants import APP_NAME


def setup_logging(level: int = logging.INFO) -> Path:
    r"""Configure rotating file logs under %APPDATA%\eclipse_spaces\logs."""
    log_dir = app_dir() / "logs"
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / f"{APP_NAME}.log"

    logger = logging.getLogger(APP_NAME)
    logger.setLevel(level)

    # Called once per process in practice; guard against duplicate handlers anyway.
    if not logger.handlers:
        handler = RotatingFileHandler(str(log_file), maxBytes=1_000_000, backupCount=5, encoding="utf-8")
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
        logger.addHandler(handler)

    return log_file
