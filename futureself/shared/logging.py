"""
Logging configuration for the application.

Pipe-separated records on stdout. Letter content, reflections and the
AI API key are never logged; HTTP client libraries used by the
reflection assistant are held at WARNING so request URLs and headers
stay out of DEBUG output.
"""

import logging
import sys

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# uvicorn per-request lines; requests/urllib3 connection chatter from the
# reflection assistant; charset detection run by requests on every reply
QUIET_LOGGERS = ("uvicorn.access", "urllib3", "requests", "charset_normalizer")


def configure_logging(level: str = "INFO") -> None:
    """Configure application logging.

    Args:
        level: The log level string (DEBUG, INFO, WARNING, ERROR).
            Unknown names fall back to INFO.
    """
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
        stream=sys.stdout,
        force=True,
    )

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logging.getLogger(__name__).debug("Logging configured at %s", level.upper())
