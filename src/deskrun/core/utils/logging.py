"""structlog setup for the CLI.

Events go to stderr through stdlib ``logging`` so the menu program's stdout
pipe is never touched. Level and renderer come from Settings
(``DESKRUN_LOG_LEVEL``, ``DESKRUN_LOG_JSON``) unless passed explicitly.
"""
import logging
import sys
from typing import Optional

import structlog

from deskrun.core.settings import Settings


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


def _level(name: str) -> int:
    level = logging.getLevelName(name.strip().upper())
    return level if isinstance(level, int) else logging.WARNING


def _renderer(json_logs: bool):
    if json_logs:
        return structlog.processors.JSONRenderer(sort_keys=True)
    return structlog.dev.ConsoleRenderer(colors=False)


def configure_logging(level: Optional[str] = None, json_logs: Optional[bool] = None, settings_obj=None) -> int:
    """Route deskrun events to stderr; returns the effective level."""
    if level is None or json_logs is None:
        settings_obj = settings_obj or Settings()
        level = settings_obj.LOG_LEVEL if level is None else level
        json_logs = settings_obj.LOG_JSON if json_logs is None else json_logs

    effective = _level(level)
    root = logging.getLogger("deskrun")
    root.setLevel(effective)
    # Replaced on every call so a swapped sys.stderr is picked up.
    for old in [h for h in root.handlers if getattr(h, "_deskrun", False)]:
        root.removeHandler(old)
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(message)s"))
    handler._deskrun = True
    root.addHandler(handler)
    root.propagate = False

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=False),
            structlog.processors.format_exc_info,
            _renderer(bool(json_logs)),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    return effective
