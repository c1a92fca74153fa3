import logging
import sys

from .constants import LOGGER_NAME

_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logging(should_debug: bool = False) -> logging.Logger:
    """Attach a stderr handler to the library logger.

    Calling this more than once only updates the level, so repeated client
    construction does not duplicate log lines.
    """
    logger = logging.getLogger(LOGGER_NAME)
    level = logging.DEBUG if should_debug else logging.INFO
    logger.setLevel(level)

    if not any(getattr(h, "_restclient", False) for h in logger.handlers):
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(_FORMAT))
        handler._restclient = True  # type: ignore[attr-defined]
        logger.addHandler(handler)

    for handler in logger.handlers:
        handler.setLevel(level)

    return logger
