import logging
import sys

import colorlog

from .config import LOG_LEVEL


class CustomColoredFormatter(colorlog.ColoredFormatter):
    def format(self, record):
        # Bracketed level name, padded to a fixed width outside the brackets
        record.levelname_bracket = f"[{record.levelname}]"
        pad = 8 - len(record.levelname)
        record.levelname_pad = " " * pad if pad > 0 else ""
        return super().format(record)


class _BelowError(logging.Filter):
    def filter(self, record):
        return record.levelno < logging.ERROR


def _formatter() -> CustomColoredFormatter:
    return CustomColoredFormatter(
        "[%(asctime)s] %(log_color)s [%(name)s] %(levelname_bracket)s%(levelname_pad)s %(message)s%(reset)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        log_colors={
            'DEBUG': 'cyan',
            'INFO': 'green',
            'WARNING': 'yellow',
            'ERROR': 'purple',
            'CRITICAL': 'red',
        },
        style='%'
    )


def get_logger(name: str) -> logging.Logger:
    """
    Get a named logger that writes progress to stdout and errors to stderr.

    Args:
        name (str): Usually ``__name__`` of the calling module.

    Returns:
        logging.Logger: The configured logger.
    """
    logger = logging.getLogger(name)
    if not logger.handlers:
        out_handler = colorlog.StreamHandler(sys.stdout)
        out_handler.setFormatter(_formatter())
        out_handler.addFilter(_BelowError())

        err_handler = colorlog.StreamHandler(sys.stderr)
        err_handler.setFormatter(_formatter())
        err_handler.setLevel(logging.ERROR)

        logger.addHandler(out_handler)
        logger.addHandler(err_handler)
        logger.setLevel(LOG_LEVEL)
        logger.propagate = False
    return logger
