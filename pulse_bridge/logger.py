# pulse_bridge/logger.py
import logging, sys

from .config import settings

ROOT_LOGGER = "pulse_bridge"


def _root() -> logging.Logger:
    root = logging.getLogger(ROOT_LOGGER)
    if not root.handlers:
        root.setLevel(settings.LOG_LEVEL.upper())
        h = logging.StreamHandler(sys.stdout)
        h.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s [%(name)s] %(message)s"
        ))
        root.addHandler(h)
    return root


def get_logger(name: str | None = None) -> logging.Logger:
    """
    Component logger under the service namespace, e.g. get_logger("scanner")
    logs as pulse_bridge.scanner. Only the namespace root carries a handler.
    """
    root = _root()
    return root.getChild(name) if name else root
