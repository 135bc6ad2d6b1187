import gzip
import logging
import logging.handlers
import os
import shutil
import sys
from gzip import GzipFile
from pathlib import Path
from typing import Optional

logger = logging.getLogger("gandi_ddns")
logger.setLevel(logging.DEBUG)
formatter = logging.Formatter(
    "%(asctime)s %(levelname)s [%(module)s:%(funcName)s:%(lineno)d] %(message)s"
)


def rotator(source, dest):
    with open(source, "rb") as f_in:
        with gzip.open(dest + ".gz", "wb") as f_out:
            assert isinstance(f_out, GzipFile)
            shutil.copyfileobj(f_in, f_out)
    os.remove(source)


def setup_logging(level: str | int = logging.INFO, log_file: Optional[Path] = None):
    """
    Attach the console handler, and a daily rotated file handler when log_file is given.

    Handlers installed by a previous call are closed and replaced.
    """
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    logger.setLevel(level)

    log_stream_handler = logging.StreamHandler(sys.stdout)
    log_stream_handler.setFormatter(formatter)
    logger.addHandler(log_stream_handler)

    if log_file is not None:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)

        log_file_handler = logging.handlers.TimedRotatingFileHandler(
            log_file, when="midnight"
        )
        log_file_handler.setFormatter(formatter)
        log_file_handler.rotator = rotator
        logger.addHandler(log_file_handler)
