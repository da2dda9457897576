"""
Logging configuration for the command line.
"""
import logging
import sys

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
HANDLER_NAME = "stackup-cli"


def configure_logging(level: str = "INFO") -> logging.Logger:
    """
    Sends stackup logs to stderr, keeping stdout free for results.
    Calling it again replaces the handler installed by the previous call.

    :param level: Level name (DEBUG, INFO, WARNING, ERROR).
    :return: The package logger.
    """
    logger = logging.getLogger("stackup")
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    for handler in list(logger.handlers):
        if handler.get_name() == HANDLER_NAME:
            logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.set_name(HANDLER_NAME)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    return logger
