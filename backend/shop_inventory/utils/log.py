import logging
import sys

from shop_inventory.config import settings

_FORMAT = "[%(name)s] %(levelname)s %(message)s"


def get_logger(name: str) -> logging.Logger:
    """
    Return the ``shop_inventory.<name>`` logger.

    The package root logger gets a single stdout handler the first time any
    logger is requested; child loggers propagate to it.
    """
    root = logging.getLogger("shop_inventory")
    if not root.handlers:
        h = logging.StreamHandler(sys.stdout)
        h.setFormatter(logging.Formatter(_FORMAT))
        root.addHandler(h)
        root.setLevel(settings.LOG_LEVEL.upper())
    return logging.getLogger(f"shop_inventory.{name}")


def set_level(level: str) -> None:
    logging.getLogger("shop_inventory").setLevel(level.upper())
