import logging
import sys

from inventory_api.config import settings


def get_logger(name: str) -> logging.Logger:
    """
    Return a named logger writing to stdout with a "[NAME] message" prefix.
    Handlers are attached once, so calling this repeatedly is safe.
    """
    log = logging.getLogger(f"inventory_api.{name}")
    log.setLevel(settings.LOG_LEVEL.upper())
    if not log.handlers:
        h = logging.StreamHandler(sys.stdout)
        h.setFormatter(
            logging.Formatter(f"%(asctime)s [{name.upper()}] %(levelname)s %(message)s")
        )
        log.addHandler(h)
        log.propagate = False
    return log
