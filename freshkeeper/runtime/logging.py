"""Logging for the FreshKeeper scan pipeline, pantry store and HTTP server.

Every module logs under the ``freshkeeper`` namespace to stderr, so CLI
output on stdout (parsed labels, pantry listings) stays clean when piped.

What goes where:
    INFO   one line per label scan, OCR batch, stored/updated/deleted item
           and HTTP request
    DEBUG  merged OCR text, OCR error bodies and raw date matches; these can
           contain whatever was printed on the label

    from freshkeeper.runtime import get_logger
    logger = get_logger(__name__)
    logger.info("Saved pantry item %s", item.id)

``FRESHKEEPER_LOG_LEVEL`` (DEBUG, INFO, WARNING/WARN, ERROR) picks the level
at first use; ``fk --debug`` switches to DEBUG afterwards.
"""

import logging
import os
import sys

DEFAULT_LOG_LEVEL = logging.INFO

LOG_FORMAT = "%(levelname)s [%(name)s] %(message)s"
LOG_FORMAT_DEBUG = "%(levelname)s [%(name)s:%(lineno)d] %(message)s"

LOGGER_NAMESPACE = "freshkeeper"

_LEVEL_NAMES = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
}

_logging_configured = False


def _level_from_env() -> int:
    """Level named by FRESHKEEPER_LOG_LEVEL; unset or unknown names give INFO."""
    return _LEVEL_NAMES.get(os.environ.get("FRESHKEEPER_LOG_LEVEL", "").strip().upper(), DEFAULT_LOG_LEVEL)


def _formatter_for(level: int) -> logging.Formatter:
    # Line numbers only help when chasing a misread date at DEBUG
    return logging.Formatter(LOG_FORMAT_DEBUG if level == logging.DEBUG else LOG_FORMAT)


def configure_logging(level: int | None = None) -> None:
    """Attach one stderr handler to the ``freshkeeper`` namespace.

    Runs once per process; later calls are no-ops. The namespace does not
    propagate, so uvicorn's or pytest's root handlers never print scan logs
    twice.
    """
    global _logging_configured

    if _logging_configured:
        return

    if level is None:
        level = _level_from_env()

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(_formatter_for(level))

    namespace_logger = logging.getLogger(LOGGER_NAMESPACE)
    namespace_logger.setLevel(level)
    namespace_logger.addHandler(handler)
    namespace_logger.propagate = False

    _logging_configured = True


def get_logger(name: str) -> logging.Logger:
    """Logger for a module, always inside the ``freshkeeper`` namespace.

    ``freshkeeper.label.label_parser`` is used as-is; a script such as
    ``import_labels`` becomes ``freshkeeper.import_labels``.
    """
    configure_logging()

    if name == LOGGER_NAMESPACE or name.startswith(f"{LOGGER_NAMESPACE}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{LOGGER_NAMESPACE}.{name}")


def set_log_level(level: int) -> None:
    """Switch the namespace level after startup (``fk --debug``)."""
    namespace_logger = logging.getLogger(LOGGER_NAMESPACE)
    namespace_logger.setLevel(level)

    for handler in namespace_logger.handlers:
        handler.setFormatter(_formatter_for(level))
