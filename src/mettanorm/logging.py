"""Package-local logging utilities.

This package is a library first. Its loguru records are disabled on import and
nothing is emitted unless the host application opts in, either with
``logger.enable("mettanorm")`` and its own sinks or through
``configure_logging``. CLI users can opt into logs via ``METTANORM_LOG_LEVEL``
or ``--log-level``.
"""

from __future__ import annotations

import os
import sys

from loguru import logger

LOGGER_NAME = "mettanorm"
LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level} | {name} | {message}"

logger.disable(LOGGER_NAME)

_sink_id: int | None = None


def configure_logging(level: str | None = None, exclusive: bool = False) -> None:
    """Configure package logging for CLI/runtime diagnostics.

    Opt-in only. If neither ``level`` nor ``METTANORM_LOG_LEVEL`` is provided,
    package records stay disabled. Otherwise the package stderr sink is
    (re)installed at the requested level. Other sinks are left alone unless
    ``exclusive`` is set, which standalone runs such as the CLI use to drop
    loguru's default stderr sink.
    """
    env_level = os.getenv("METTANORM_LOG_LEVEL", "")
    raw_level = level if level is not None else (env_level or "")
    resolved_level = raw_level.strip().upper()

    if not resolved_level:
        logger.disable(LOGGER_NAME)
        return

    global _sink_id
    # Always reset our own sink to avoid stale stderr streams across repeated CLI calls.
    if exclusive:
        logger.remove()
    elif _sink_id is not None:
        logger.remove(_sink_id)
    _sink_id = None
    _sink_id = logger.add(sys.stderr, level=resolved_level, format=LOG_FORMAT, filter=LOGGER_NAME)
    logger.enable(LOGGER_NAME)
