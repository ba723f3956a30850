#!/usr/bin/env python3
"""Logging setup: console output plus an append-only log file."""
import logging
import os
import sys

LOGGER_NAME = "swap_manager"
LOG_FORMAT = "[%(asctime)s] [%(levelname)s] %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class _BelowErrorFilter(logging.Filter):
    def filter(self, record):
        return record.levelno < logging.ERROR


def get_logger():
    return logging.getLogger(LOGGER_NAME)


def setup_logging(debug=None):
    """
    Configures the console handlers of the ``swap_manager`` logger.

    INFO and WARNING go to stdout, ERROR to stderr. Set
    ``SWAP_MANAGER_DEBUG=1`` to also see DEBUG records, such as the
    output of best-effort cleanup commands.
    """
    if debug is None:
        debug = os.environ.get("SWAP_MANAGER_DEBUG") == "1"

    logger = get_logger()
    logger.setLevel(logging.DEBUG if debug else logging.INFO)
    logger.propagate = False
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    out = logging.StreamHandler(sys.stdout)
    out.addFilter(_BelowErrorFilter())
    out.setFormatter(formatter)
    logger.addHandler(out)

    err = logging.StreamHandler(sys.stderr)
    err.setLevel(logging.ERROR)
    err.setFormatter(formatter)
    logger.addHandler(err)
    return logger


def attach_log_file(path, mode=0o640):
    """Appends every record to ``path``, creating it with ``mode`` if needed."""
    logger = get_logger()
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)

    handler = logging.FileHandler(path, mode="a", encoding="utf-8")
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    logger.addHandler(handler)
    os.chmod(path, mode)
    return handler
