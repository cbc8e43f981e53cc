"""structlog configuration for the Collection Registry.

Library code only ever calls ``structlog.get_logger(__name__)``; the CLI
calls :func:`configure_logging` once to decide where events go and how they
are rendered.
"""

from __future__ import annotations

import logging
import os
import sys

import structlog

ENV_DEBUG = "COLLECTION_REGISTRY_DEBUG"


def configure_logging(debug: bool | None = None, json_output: bool = False) -> None:
    """Configure structlog for console output.

    Args:
        debug: Emit debug-level events (skipped documents, etc.). When
            ``None`` the ``COLLECTION_REGISTRY_DEBUG`` variable decides.
        json_output: Render events as JSON lines instead of the coloured
            console format.
    """
    if debug is None:
        debug = os.environ.get(ENV_DEBUG, "").strip().lower() in ("1", "true", "yes")

    level = logging.DEBUG if debug else logging.INFO
    renderer = (
        structlog.processors.JSONRenderer()
        if json_output
        else structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="%H:%M:%S"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
    )
