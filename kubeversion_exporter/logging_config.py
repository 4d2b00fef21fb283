"""Logging configuration for the exporter.

Application code logs through the standard library with structured context in
``extra``. This module only decides how records are rendered: a plain text
line, or one JSON object per line rendered by structlog.
"""

import logging
import sys

import structlog

LOG_LEVEL_MAP = {
    "trace": logging.DEBUG,
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "error": logging.ERROR,
    "fatal": logging.CRITICAL,
    "panic": logging.CRITICAL,
}

PLAIN_FORMAT = "%(asctime)s [%(levelname)s] %(name)s (%(filename)s:%(lineno)d): %(message)s"

NOISY_LOGGERS = ("urllib3", "urllib3.connectionpool", "kubernetes.client.rest", "waitress.queue")


def get_log_level(level: str) -> int:
    """Map a log level name to a logging level, defaulting to INFO."""
    return LOG_LEVEL_MAP.get(level.lower(), logging.INFO)


def create_formatter(output: str) -> logging.Formatter:
    """Create the formatter for the "plain" or "json" log output."""
    if output != "json":
        return logging.Formatter(PLAIN_FORMAT)

    return structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=[
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.ExtraAdder(),
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.CallsiteParameterAdder(
                {
                    structlog.processors.CallsiteParameter.FILENAME,
                    structlog.processors.CallsiteParameter.LINENO,
                }
            ),
        ],
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(default=str),
        ],
    )


def configure_logging(level: str = "info", output: str = "plain") -> None:
    """Install a single stream handler on the root logger."""
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(create_formatter(output))

    root_logger = logging.getLogger()
    for existing in list(root_logger.handlers):
        root_logger.removeHandler(existing)
    root_logger.addHandler(handler)
    root_logger.setLevel(get_log_level(level))

    for noisy in NOISY_LOGGERS:
        logging.getLogger(noisy).setLevel(logging.WARNING)
