"""Core utilities package."""

from .config import Settings, get_settings
from .exceptions import (ConversionError, InvalidFieldError, ProjectLensError,
                         UpstreamError)
from .logging import get_logger, log_event, setup_logging

__all__ = [
    "Settings",
    "get_settings",
    "setup_logging",
    "get_logger",
    "log_event",
    "ProjectLensError",
    "ConversionError",
    "InvalidFieldError",
    "UpstreamError",
]
