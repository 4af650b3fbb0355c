import logging
import sys

from app.settings import settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(name: str = "ticket_desk") -> logging.Logger:
    """
    Configures the ticket backend logger once. DEBUG forces debug output,
    otherwise LOG_LEVEL decides.
    """
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger
    level = logging.DEBUG if settings.DEBUG else logging.getLevelName(settings.LOG_LEVEL.upper())
    logger.setLevel(level if isinstance(level, int) else logging.INFO)
    logger.propagate = False

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    return logger


logger = setup_logging()
