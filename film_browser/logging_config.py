from __future__ import annotations

import logging
import os
from typing import Optional

from pythonjsonlogger import jsonlogger

LOG_FORMAT_ENV = "FILM_BROWSER_LOG_FORMAT"
LOG_FORMATS = ("json", "plain")

APP_NAME = "film_browser"

# Per-request access lines from the Dash dev server drown out callback logs.
QUIET_LOGGERS = {"werkzeug": logging.WARNING}


def _formatter(format_mode: str) -> logging.Formatter:
    if format_mode == "plain":
        return logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")
    # extra={...} fields (view_id, n_rows, elapsed_ms, ...) become top-level JSON keys
    return jsonlogger.JsonFormatter(
        "%(asctime)s %(levelname)s %(name)s %(message)s",
        rename_fields={"levelname": "level", "asctime": "time"},
        static_fields={"app": APP_NAME},
    )


def configure_logging(
        level: int = logging.INFO,
        force_format: Optional[str] = None,
) -> None:
    """
    Install a single root handler for the app.

    Format: `force_format` if given, else FILM_BROWSER_LOG_FORMAT, else "json".

    :raises ValueError: for a format other than "json" or "plain"
    """
    format_mode = (force_format or os.getenv(LOG_FORMAT_ENV) or "json").lower()
    if format_mode not in LOG_FORMATS:
        raise ValueError(f"Unknown log format '{format_mode}', expected one of {LOG_FORMATS}")

    handler = logging.StreamHandler()
    handler.setFormatter(_formatter(format_mode))

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()
    root.addHandler(handler)

    for name, quiet_level in QUIET_LOGGERS.items():
        logging.getLogger(name).setLevel(max(level, quiet_level))
