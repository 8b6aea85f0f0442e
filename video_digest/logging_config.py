from __future__ import annotations

import logging
import sys

from video_digest.config import LoggingSettings

DEFAULT_LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def configure_logging(settings: LoggingSettings) -> None:
    """Configure process-wide logging once at startup; library modules only create loggers.

    Records go to stderr so JSON written to stdout stays parseable, and are
    mirrored to ``settings.log_file`` when one is set.
    """

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if settings.log_file is not None:
        settings.log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(settings.log_file, encoding="utf-8"))

    logging.basicConfig(
        level=getattr(logging, settings.level.upper(), logging.INFO),
        format=DEFAULT_LOG_FORMAT,
        handlers=handlers,
        force=True,
    )
