import logging
import sys

from vendorconnect.config import settings

_ROOT_LOGGER = "vendorconnect"
_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def setup_logging(level: str | None = None) -> None:
    """Configure the ``vendorconnect`` logger hierarchy.

    Safe to call more than once; the stream handler is only attached the
    first time.
    """
    logger = logging.getLogger(_ROOT_LOGGER)
    logger.setLevel((level or settings.LOG_LEVEL).upper())

    if not any(getattr(h, "_vendorconnect", False) for h in logger.handlers):
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(_FORMAT))
        handler._vendorconnect = True  # type: ignore[attr-defined]
        logger.addHandler(handler)

    logger.propagate = False


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(f"{_ROOT_LOGGER}.{name}")
