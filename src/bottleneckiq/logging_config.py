"""
Logging configuration for BottleneckIQ.

Log Levels:
    DEBUG:   Development details (per-task scores, rule hits, row parsing)
    INFO:    Key operations ("Analyzing 120 tasks", "Detected 2 anomalies")
    WARNING: Recoverable issues (skipped invalid rows, unmapped columns)
    ERROR:   Failures (unreadable input file)

Usage:
    from bottleneckiq.logging_config import setup_logging
    setup_logging()

    # In any module:
    import logging
    logger = logging.getLogger(__name__)
    logger.info("Starting analysis")
"""

import logging
import sys

from bottleneckiq.config import settings

_logging_configured = False


def setup_logging(level: str | None = None) -> None:
    """Configure logging for the entire application.

    Safe to call multiple times. Only attaches handlers on the first call;
    subsequent calls just update the log level.

    Args:
        level: Log level string (DEBUG, INFO, WARNING, ERROR). If None, uses
               the LOG_LEVEL setting.
    """
    global _logging_configured  # noqa: PLW0603

    if level is None:
        level = settings.log_level
    log_level = getattr(logging, level.upper(), logging.INFO)
    app_logger = logging.getLogger("bottleneckiq")

    if not _logging_configured:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(
            logging.Formatter(
                fmt="%(asctime)s | %(name)s | %(levelname)s | %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        app_logger.addHandler(handler)
        # Avoid duplicate lines when the host application configures the root logger
        app_logger.propagate = False

        # pandas/openpyxl emit parser chatter at INFO
        logging.getLogger("openpyxl").setLevel(logging.WARNING)

        _logging_configured = True

    app_logger.setLevel(log_level)
