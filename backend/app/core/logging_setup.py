"""
Logging setup for the API process.
"""
import logging
import sys

# Third-party loggers that are too chatty at INFO.
_NOISY_LOGGERS = ("sqlalchemy.pool", "httpx", "multipart")

_configured = False


def setup_logging(level: str = "INFO") -> None:
    """
    Configure the root logger once: a single stderr handler with timestamps.

    Calling it again only adjusts the level, so building several apps in one
    process (tests) does not stack handlers.
    """
    global _configured
    root = logging.getLogger()
    root.setLevel(level.upper())

    if _configured:
        return

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    ))
    root.addHandler(handler)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logging.captureWarnings(True)
    _configured = True
