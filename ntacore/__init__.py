import logging

from ntacore.config import get_settings

__version__ = "0.1.0"


def configure_logging(level: str | int | None = None) -> None:
    """Set the ntacore logger level. Handlers are left to the host application."""
    if level is None:
        level = get_settings().LOG_LEVEL
    if isinstance(level, str):
        level = level.upper()
    logging.getLogger("ntacore").setLevel(level)
